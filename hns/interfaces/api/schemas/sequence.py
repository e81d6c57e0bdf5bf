"""Schemas for sequence endpoints."""

from pydantic import BaseModel, ConfigDict


class NextSequenceRead(BaseModel):
    template_id: int
    next_sequence: int


class SequenceUsageRead(BaseModel):
    template_id: int
    total_sequences: int
    used_sequences: int
    next_sequence: int
    highest_sequence: int
    lowest_sequence: int

    model_config = ConfigDict(from_attributes=True)


class SequenceGapsRead(BaseModel):
    template_id: int
    gaps: list[int]

"""Schemas for template and template group endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from hns.domain.entities import ValidationType

GroupValidationType = Literal["regex", "list", "fixed", "sequence"]


class TemplateGroupCreate(BaseModel):
    """Payload describing one group; its position follows the request order."""

    name: str = Field(..., min_length=1, max_length=50)
    length: int = Field(..., gt=0)
    validation_type: GroupValidationType
    validation_value: str = Field(default="", max_length=255)
    is_required: bool = False


class TemplateGroupRead(BaseModel):
    id: int
    template_id: int
    name: str
    length: int
    position: int
    is_required: bool
    validation_type: ValidationType
    validation_value: str

    model_config = ConfigDict(from_attributes=True)


class TemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=255)
    max_length: int = Field(..., gt=0, le=253)
    sequence_start: int = Field(default=1, ge=0)
    sequence_length: int = Field(..., gt=0)
    sequence_padding: bool = True
    sequence_increment: int = Field(default=1, gt=0)


class TemplateCreate(TemplateBase):
    """Payload required to create a template."""

    groups: list[TemplateGroupCreate] = Field(..., min_length=1)
    created_by: str | None = Field(default=None, max_length=50)


class TemplateUpdate(BaseModel):
    updated_by: str = Field(..., min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=255)
    max_length: int | None = Field(default=None, gt=0, le=253)
    sequence_start: int | None = Field(default=None, ge=0)
    sequence_length: int | None = Field(default=None, gt=0)
    sequence_padding: bool | None = None
    sequence_increment: int | None = Field(default=None, gt=0)
    is_active: bool | None = None
    groups: list[TemplateGroupCreate] | None = None

    model_config = ConfigDict(extra="forbid")


class TemplateRead(TemplateBase):
    id: int
    created_by: str | None
    created_at: datetime | None
    updated_by: str | None
    updated_at: datetime | None
    is_active: bool
    groups: list[TemplateGroupRead]

    model_config = ConfigDict(from_attributes=True)


class TemplateList(BaseModel):
    items: list[TemplateRead]
    total: int

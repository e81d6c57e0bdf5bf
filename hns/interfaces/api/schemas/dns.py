"""Schemas for DNS probing endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DnsCheckRequest(BaseModel):
    hostnames: list[str] = Field(..., min_length=1)


class ProbeResultRead(BaseModel):
    hostname: str
    exists: bool
    ip_address: str | None
    verified_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ScanRequest(BaseModel):
    template_id: int = Field(..., gt=0)
    start_seq: int
    end_seq: int
    params: dict[str, str] = Field(default_factory=dict)
    max_concurrency: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _validate_bounds(self) -> "ScanRequest":
        if self.end_seq < self.start_seq:
            raise ValueError("end_seq must be greater than or equal to start_seq")
        return self


class ScanItemRead(BaseModel):
    hostname: str
    sequence_num: int
    exists: bool
    ip_address: str | None
    lookup_failed: bool

    model_config = ConfigDict(from_attributes=True)


class ScanResultRead(BaseModel):
    template_id: int
    template_name: str
    total_hostnames: int
    existing_hostnames: int
    failed_lookups: int
    scan_duration: float
    results: list[ScanItemRead]

    model_config = ConfigDict(from_attributes=True)


class DiscoverRequest(BaseModel):
    template_id: int = Field(..., gt=0)
    params: dict[str, str] = Field(default_factory=dict)


class SequenceRangeRead(BaseModel):
    template_id: int
    low: int
    high: int


class AnalyzeRequest(DiscoverRequest):
    sample_size: int = Field(default=100, gt=0, le=10000)


class UsageReportRead(BaseModel):
    template_id: int
    low: int
    high: int
    range_discovered: bool
    sampled: int
    existing: int
    buckets: dict[str, int]

    model_config = ConfigDict(from_attributes=True)

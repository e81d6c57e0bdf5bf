"""Schemas for hostname endpoints."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from hns.domain.entities import HostnameStatus


class HostnameGenerateRequest(BaseModel):
    template_id: int = Field(..., gt=0)
    sequence_num: int = 0
    params: dict[str, str] = Field(default_factory=dict)


class HostnameGenerateResponse(BaseModel):
    hostname: str


class HostnameReserveRequest(BaseModel):
    template_id: int = Field(..., gt=0)
    params: dict[str, str] = Field(default_factory=dict)
    requested_by: str = Field(..., min_length=1, max_length=50)


class HostnameCommitRequest(BaseModel):
    committed_by: str = Field(..., min_length=1, max_length=50)


class HostnameReleaseRequest(BaseModel):
    released_by: str = Field(..., min_length=1, max_length=50)


class HostnameRead(BaseModel):
    id: int
    name: str
    template_id: int
    sequence_num: int
    status: HostnameStatus
    reserved_by: str | None
    reserved_at: datetime | None
    committed_by: str | None
    committed_at: datetime | None
    released_by: str | None
    released_at: datetime | None
    dns_verified: bool
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class HostnameList(BaseModel):
    items: list[HostnameRead]
    total: int


class HostnameUserCounts(BaseModel):
    username: str
    reserved: int
    committed: int
    released: int


class HostnameDnsVerification(BaseModel):
    """Outcome of probing a stored hostname and recording the result."""

    hostname: HostnameRead
    exists: bool
    ip_address: str | None
    verified_at: datetime

"""Domain entity representing a generated hostname."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class HostnameStatus(str, Enum):
    """Lifecycle states of a hostname."""

    AVAILABLE = "available"
    RESERVED = "reserved"
    COMMITTED = "committed"
    RELEASED = "released"


@dataclass
class Hostname:
    """A persisted name instance produced from a template."""

    id: int | None
    name: str
    template_id: int
    sequence_num: int
    status: HostnameStatus
    reserved_by: str
    reserved_at: datetime | None
    committed_by: str | None = None
    committed_at: datetime | None = None
    released_by: str | None = None
    released_at: datetime | None = None
    dns_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["Hostname", "HostnameStatus"]

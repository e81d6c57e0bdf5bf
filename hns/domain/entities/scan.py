"""Value objects produced by DNS probes and range scans."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single DNS existence check."""

    hostname: str
    exists: bool
    ip_address: str | None
    verified_at: datetime


@dataclass(frozen=True)
class ScanItem:
    hostname: str
    sequence_num: int
    exists: bool
    ip_address: str | None = None
    lookup_failed: bool = False


@dataclass
class ScanResult:
    """Aggregate of one range scan."""

    template_id: int
    template_name: str
    total_hostnames: int = 0
    existing_hostnames: int = 0
    failed_lookups: int = 0
    scan_duration: float = 0.0
    results: list[ScanItem] = field(default_factory=list)


@dataclass(frozen=True)
class SequenceRange:
    low: int
    high: int


@dataclass
class UsageReport:
    """Coarse usage statistics sampled from DNS for a template."""

    template_id: int
    low: int
    high: int
    range_discovered: bool
    sampled: int
    existing: int
    buckets: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class SequenceUsage:
    """Sequence allocation statistics computed from stored hostnames."""

    template_id: int
    total_sequences: int
    used_sequences: int
    next_sequence: int
    highest_sequence: int
    lowest_sequence: int


__all__ = [
    "ProbeResult",
    "ScanItem",
    "ScanResult",
    "SequenceRange",
    "SequenceUsage",
    "UsageReport",
]

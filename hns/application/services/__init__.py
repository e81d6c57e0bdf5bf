"""Core hostname services."""

from .range_scanner import NameProbe, RangeScanner
from .reservation import MAX_RESERVE_ATTEMPTS, SEARCH_FILTER_FIELDS, ReservationEngine
from .sequence import SequenceAllocator

__all__ = [
    "MAX_RESERVE_ATTEMPTS",
    "NameProbe",
    "RangeScanner",
    "ReservationEngine",
    "SEARCH_FILTER_FIELDS",
    "SequenceAllocator",
]

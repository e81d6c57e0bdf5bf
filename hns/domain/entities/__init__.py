"""Domain entities exposed by the application."""

from .hostname import Hostname, HostnameStatus
from .scan import (
    ProbeResult,
    ScanItem,
    ScanResult,
    SequenceRange,
    SequenceUsage,
    UsageReport,
)
from .template import (
    FixedRule,
    GroupRule,
    ListRule,
    RegexRule,
    SequenceRule,
    Template,
    TemplateGroup,
    ValidationType,
    rule_from_storage,
)

__all__ = [
    "FixedRule",
    "GroupRule",
    "Hostname",
    "HostnameStatus",
    "ListRule",
    "ProbeResult",
    "RegexRule",
    "ScanItem",
    "ScanResult",
    "SequenceRange",
    "SequenceRule",
    "SequenceUsage",
    "Template",
    "TemplateGroup",
    "UsageReport",
    "ValidationType",
    "rule_from_storage",
]

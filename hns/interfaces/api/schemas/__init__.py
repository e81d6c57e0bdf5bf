from .dns import (
    AnalyzeRequest,
    DiscoverRequest,
    DnsCheckRequest,
    ProbeResultRead,
    ScanItemRead,
    ScanRequest,
    ScanResultRead,
    SequenceRangeRead,
    UsageReportRead,
)
from .hostname import (
    HostnameCommitRequest,
    HostnameDnsVerification,
    HostnameGenerateRequest,
    HostnameGenerateResponse,
    HostnameList,
    HostnameRead,
    HostnameReleaseRequest,
    HostnameReserveRequest,
    HostnameUserCounts,
)
from .sequence import NextSequenceRead, SequenceGapsRead, SequenceUsageRead
from .template import (
    TemplateCreate,
    TemplateGroupCreate,
    TemplateGroupRead,
    TemplateList,
    TemplateRead,
    TemplateUpdate,
)

__all__ = [
    "AnalyzeRequest",
    "DiscoverRequest",
    "DnsCheckRequest",
    "HostnameCommitRequest",
    "HostnameDnsVerification",
    "HostnameGenerateRequest",
    "HostnameGenerateResponse",
    "HostnameList",
    "HostnameRead",
    "HostnameReleaseRequest",
    "HostnameReserveRequest",
    "HostnameUserCounts",
    "NextSequenceRead",
    "ProbeResultRead",
    "ScanItemRead",
    "ScanRequest",
    "ScanResultRead",
    "SequenceGapsRead",
    "SequenceRangeRead",
    "SequenceUsageRead",
    "TemplateCreate",
    "TemplateGroupCreate",
    "TemplateGroupRead",
    "TemplateList",
    "TemplateRead",
    "TemplateUpdate",
]

"""Routes probing hostnames and template ranges against DNS."""

from fastapi import APIRouter, Depends

from hns.application.services import RangeScanner
from hns.domain.errors import HNSError
from hns.infrastructure.dns_probe import ExistenceProbe
from hns.interfaces.api.dependencies import get_probe, get_range_scanner
from hns.interfaces.api.routes_helpers import to_http_exception
from hns.interfaces.api.schemas import (
    AnalyzeRequest,
    DiscoverRequest,
    DnsCheckRequest,
    ProbeResultRead,
    ScanRequest,
    ScanResultRead,
    SequenceRangeRead,
    UsageReportRead,
)

router = APIRouter(prefix="/dns", tags=["dns"])


@router.post("/check", response_model=list[ProbeResultRead])
async def check_hostnames(
    payload: DnsCheckRequest,
    probe: ExistenceProbe = Depends(get_probe),
) -> list[ProbeResultRead]:
    """Check each hostname; names whose lookup failed are left out of the answer."""

    try:
        results = await probe.check_many(payload.hostnames)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return [ProbeResultRead.model_validate(result) for result in results]


@router.post("/scan", response_model=ScanResultRead)
async def scan_range(
    payload: ScanRequest,
    scanner: RangeScanner = Depends(get_range_scanner),
) -> ScanResultRead:
    try:
        result = await scanner.scan(
            payload.template_id,
            payload.start_seq,
            payload.end_seq,
            payload.params,
            payload.max_concurrency,
        )
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return ScanResultRead.model_validate(result)


@router.post("/discover", response_model=SequenceRangeRead)
async def discover_range(
    payload: DiscoverRequest,
    scanner: RangeScanner = Depends(get_range_scanner),
) -> SequenceRangeRead:
    try:
        found = await scanner.discover_range(payload.template_id, payload.params)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return SequenceRangeRead(template_id=payload.template_id, low=found.low, high=found.high)


@router.post("/analyze", response_model=UsageReportRead)
async def analyze_usage(
    payload: AnalyzeRequest,
    scanner: RangeScanner = Depends(get_range_scanner),
) -> UsageReportRead:
    """Sample the template's DNS usage and bucket existing names by prefix."""

    try:
        report = await scanner.analyze_usage(
            payload.template_id, payload.sample_size, payload.params
        )
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return UsageReportRead.model_validate(report)

"""Routes to generate, reserve and track hostnames."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool

from hns.application.services import ReservationEngine
from hns.domain.entities import Hostname, HostnameStatus
from hns.domain.errors import HNSError
from hns.infrastructure.dns_probe import ExistenceProbe
from hns.interfaces.api.dependencies import get_probe, get_reservation_engine
from hns.interfaces.api.routes_helpers import to_http_exception
from hns.interfaces.api.schemas import (
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

router = APIRouter(prefix="/hostnames", tags=["hostnames"])


def _hostname_to_read_model(hostname: Hostname) -> HostnameRead:
    return HostnameRead.model_validate(hostname)


@router.post("/generate", response_model=HostnameGenerateResponse)
def generate_hostname(
    payload: HostnameGenerateRequest,
    engine: ReservationEngine = Depends(get_reservation_engine),
) -> HostnameGenerateResponse:
    """Preview the hostname of a sequence number without reserving it."""

    try:
        name = engine.generate(payload.template_id, payload.sequence_num, payload.params)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return HostnameGenerateResponse(hostname=name)


@router.post(
    "/reserve", response_model=HostnameRead, status_code=status.HTTP_201_CREATED
)
def reserve_hostname(
    payload: HostnameReserveRequest,
    engine: ReservationEngine = Depends(get_reservation_engine),
) -> HostnameRead:
    try:
        hostname = engine.reserve(
            payload.template_id, payload.params, payload.requested_by
        )
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return _hostname_to_read_model(hostname)


@router.get("/", response_model=HostnameList)
def search_hostnames(
    template_id: int | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    sequence_num: int | None = None,
    reserved_by: str | None = None,
    committed_by: str | None = None,
    released_by: str | None = None,
    dns_verified: bool | None = None,
    name_contains: str | None = None,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, gt=0, le=1000),
    engine: ReservationEngine = Depends(get_reservation_engine),
) -> HostnameList:
    """Search hostnames by exact field values and an optional name fragment."""

    filters = {
        "template_id": template_id,
        "status": status_filter,
        "sequence_num": sequence_num,
        "reserved_by": reserved_by,
        "committed_by": committed_by,
        "released_by": released_by,
        "dns_verified": dns_verified,
    }
    try:
        hostnames, total = engine.search(
            filters, name_contains=name_contains, limit=limit, offset=skip
        )
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return HostnameList(
        items=[_hostname_to_read_model(hostname) for hostname in hostnames],
        total=total,
    )


@router.get("/status/{hostname_status}", response_model=list[HostnameRead])
def list_hostnames_by_status(
    hostname_status: HostnameStatus,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, gt=0, le=1000),
    engine: ReservationEngine = Depends(get_reservation_engine),
) -> list[HostnameRead]:
    hostnames = engine.list_by_status(hostname_status, limit=limit, offset=skip)
    return [_hostname_to_read_model(hostname) for hostname in hostnames]


@router.get("/users/{username}/counts", response_model=HostnameUserCounts)
def count_hostnames_by_user(
    username: str,
    engine: ReservationEngine = Depends(get_reservation_engine),
) -> HostnameUserCounts:
    """Return how many hostnames the user reserved, grouped by status."""

    counts = engine.count_by_user(username)
    return HostnameUserCounts(
        username=username,
        reserved=counts[HostnameStatus.RESERVED],
        committed=counts[HostnameStatus.COMMITTED],
        released=counts[HostnameStatus.RELEASED],
    )


@router.get("/by-name/{name}", response_model=HostnameRead)
def read_hostname_by_name(
    name: str,
    engine: ReservationEngine = Depends(get_reservation_engine),
) -> HostnameRead:
    try:
        hostname = engine.get_by_name(name)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return _hostname_to_read_model(hostname)


@router.get("/{hostname_id}", response_model=HostnameRead)
def read_hostname(
    hostname_id: int,
    engine: ReservationEngine = Depends(get_reservation_engine),
) -> HostnameRead:
    try:
        hostname = engine.get(hostname_id)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return _hostname_to_read_model(hostname)


@router.post("/{hostname_id}/commit", response_model=HostnameRead)
def commit_hostname(
    hostname_id: int,
    payload: HostnameCommitRequest,
    engine: ReservationEngine = Depends(get_reservation_engine),
) -> HostnameRead:
    try:
        hostname = engine.commit(hostname_id, payload.committed_by)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return _hostname_to_read_model(hostname)


@router.post("/{hostname_id}/release", response_model=HostnameRead)
def release_hostname(
    hostname_id: int,
    payload: HostnameReleaseRequest,
    engine: ReservationEngine = Depends(get_reservation_engine),
) -> HostnameRead:
    try:
        hostname = engine.release(hostname_id, payload.released_by)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return _hostname_to_read_model(hostname)


@router.post("/{hostname_id}/dns-verify", response_model=HostnameDnsVerification)
async def verify_hostname_dns(
    hostname_id: int,
    engine: ReservationEngine = Depends(get_reservation_engine),
    probe: ExistenceProbe = Depends(get_probe),
) -> HostnameDnsVerification:
    """Probe a stored hostname in DNS and persist whether it resolves."""

    try:
        hostname = await run_in_threadpool(engine.get, hostname_id)
        outcome = await probe.check(hostname.name)
        hostname = await run_in_threadpool(
            engine.record_dns_verification, hostname_id, outcome.exists
        )
    except HNSError as exc:
        raise to_http_exception(exc) from exc

    return HostnameDnsVerification(
        hostname=_hostname_to_read_model(hostname),
        exists=outcome.exists,
        ip_address=outcome.ip_address,
        verified_at=outcome.verified_at,
    )

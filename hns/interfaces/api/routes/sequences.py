"""Routes exposing sequence allocation state."""

from fastapi import APIRouter, Depends, Query

from hns.application.services import SequenceAllocator
from hns.domain.errors import HNSError
from hns.interfaces.api.dependencies import get_sequence_allocator
from hns.interfaces.api.routes_helpers import to_http_exception
from hns.interfaces.api.schemas import (
    NextSequenceRead,
    SequenceGapsRead,
    SequenceUsageRead,
)

router = APIRouter(prefix="/sequences", tags=["sequences"])


@router.get("/next/{template_id}", response_model=NextSequenceRead)
def read_next_sequence(
    template_id: int,
    allocator: SequenceAllocator = Depends(get_sequence_allocator),
) -> NextSequenceRead:
    """Return the sequence number the next reservation would start from."""

    try:
        next_sequence = allocator.next_sequence(template_id)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return NextSequenceRead(template_id=template_id, next_sequence=next_sequence)


@router.get("/{template_id}/usage", response_model=SequenceUsageRead)
def read_sequence_usage(
    template_id: int,
    allocator: SequenceAllocator = Depends(get_sequence_allocator),
) -> SequenceUsageRead:
    try:
        usage = allocator.usage(template_id)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return SequenceUsageRead.model_validate(usage)


@router.get("/{template_id}/gaps", response_model=SequenceGapsRead)
def read_sequence_gaps(
    template_id: int,
    max_gaps: int = Query(default=100, gt=0, le=10000),
    allocator: SequenceAllocator = Depends(get_sequence_allocator),
) -> SequenceGapsRead:
    try:
        gaps = allocator.find_gaps(template_id, max_gaps=max_gaps)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return SequenceGapsRead(template_id=template_id, gaps=gaps)

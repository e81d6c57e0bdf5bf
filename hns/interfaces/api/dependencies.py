"""FastAPI dependency utilities."""

from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from hns.application.services import RangeScanner, ReservationEngine, SequenceAllocator
from hns.config import Settings
from hns.infrastructure.database import session_scope
from hns.infrastructure.dns_probe import ExistenceProbe
from hns.infrastructure.repositories import HostnameRepository, TemplateRepository


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session bound to the application's engine."""

    yield from session_scope(request.app.state.session_factory)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_probe(request: Request) -> ExistenceProbe:
    """Return the DNS probe configured on the application."""

    return request.app.state.probe


def get_sequence_allocator(db: Session = Depends(get_db)) -> SequenceAllocator:
    return SequenceAllocator(TemplateRepository(db), HostnameRepository(db))


def get_reservation_engine(db: Session = Depends(get_db)) -> ReservationEngine:
    return ReservationEngine(TemplateRepository(db), HostnameRepository(db))


def get_range_scanner(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    probe: ExistenceProbe = Depends(get_probe),
) -> RangeScanner:
    return RangeScanner.from_settings(settings, TemplateRepository(db), probe)


__all__ = [
    "get_app_settings",
    "get_db",
    "get_probe",
    "get_range_scanner",
    "get_reservation_engine",
    "get_sequence_allocator",
]

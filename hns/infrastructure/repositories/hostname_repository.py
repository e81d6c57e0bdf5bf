"""Persistence layer for hostnames."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from hns.domain.entities import Hostname, HostnameStatus
from hns.domain.errors import DuplicateHostnameError
from hns.infrastructure.models import HostnameModel
from hns.utils import ensure_utc, now_utc

_FILTER_COLUMNS = {
    "template_id": HostnameModel.template_id,
    "status": HostnameModel.status,
    "sequence_num": HostnameModel.sequence_num,
    "reserved_by": HostnameModel.reserved_by,
    "committed_by": HostnameModel.committed_by,
    "released_by": HostnameModel.released_by,
    "dns_verified": HostnameModel.dns_verified,
}


class HostnameRepository:
    """Provide persistence operations for hostnames."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, hostname: Hostname) -> Hostname:
        model = HostnameModel()
        self._apply_entity_to_model(model, hostname)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if self._name_taken(hostname.name):
                raise DuplicateHostnameError(hostname.name) from exc
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, hostname_id: int) -> Hostname | None:
        model = self.session.get(HostnameModel, hostname_id, populate_existing=True)
        return self._to_entity(model) if model else None

    def get_by_name(self, name: str) -> Hostname | None:
        model = self.session.query(HostnameModel).filter(HostnameModel.name == name).first()
        return self._to_entity(model) if model else None

    def get_by_status(
        self, status: HostnameStatus, *, limit: int = 100, offset: int = 0
    ) -> Sequence[Hostname]:
        query = self.session.query(HostnameModel).filter(
            HostnameModel.status == HostnameStatus(status).value
        )
        return self._page(query, limit=limit, offset=offset)

    def get_by_template_id(
        self, template_id: int, *, limit: int | None = 100, offset: int = 0
    ) -> Sequence[Hostname]:
        query = self.session.query(HostnameModel).filter(
            HostnameModel.template_id == template_id
        )
        return self._page(query, limit=limit, offset=offset)

    def update_status(
        self,
        hostname_id: int,
        *,
        status: HostnameStatus,
        expected_status: HostnameStatus,
        actor: str,
    ) -> bool:
        now = now_utc()
        values: dict[Any, Any] = {
            HostnameModel.status: status.value,
            HostnameModel.updated_at: now,
        }
        if status is HostnameStatus.COMMITTED:
            values[HostnameModel.committed_by] = actor
            values[HostnameModel.committed_at] = now
        elif status is HostnameStatus.RELEASED:
            values[HostnameModel.released_by] = actor
            values[HostnameModel.released_at] = now

        updated = (
            self.session.query(HostnameModel)
            .filter(HostnameModel.id == hostname_id)
            .filter(HostnameModel.status == expected_status.value)
            .update(values, synchronize_session=False)
        )
        self.session.commit()
        return updated == 1

    def set_dns_verified(self, hostname_id: int, verified: bool) -> bool:
        updated = (
            self.session.query(HostnameModel)
            .filter(HostnameModel.id == hostname_id)
            .update(
                {HostnameModel.dns_verified: verified, HostnameModel.updated_at: now_utc()},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated == 1

    def get_next_sequence_number(self, template_id: int) -> int | None:
        highest = (
            self.session.query(func.max(HostnameModel.sequence_num))
            .filter(HostnameModel.template_id == template_id)
            .scalar()
        )
        return None if highest is None else highest + 1

    def count(
        self, *, template_id: int | None = None, status: HostnameStatus | None = None
    ) -> int:
        query = self.session.query(func.count(HostnameModel.id))
        if template_id:
            query = query.filter(HostnameModel.template_id == template_id)
        if status is not None:
            query = query.filter(HostnameModel.status == HostnameStatus(status).value)
        return query.scalar() or 0

    def count_by_user(self, username: str, status: HostnameStatus) -> int:
        return (
            self.session.query(func.count(HostnameModel.id))
            .filter(HostnameModel.reserved_by == username)
            .filter(HostnameModel.status == HostnameStatus(status).value)
            .scalar()
            or 0
        )

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        name_contains: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[Sequence[Hostname], int]:
        query = self.session.query(HostnameModel)
        for key, value in (filters or {}).items():
            column = _FILTER_COLUMNS.get(key)
            if column is None:
                msg = f"Unsupported hostname filter: {key}"
                raise ValueError(msg)
            if isinstance(value, HostnameStatus):
                value = value.value
            query = query.filter(column == value)
        if name_contains:
            escaped = (
                name_contains.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            )
            query = query.filter(HostnameModel.name.like(f"%{escaped}%", escape="\\"))

        total = query.order_by(None).count()
        return self._page(query, limit=limit, offset=offset), total

    def _name_taken(self, name: str) -> bool:
        return (
            self.session.query(HostnameModel.id).filter(HostnameModel.name == name).first()
            is not None
        )

    def _page(self, query: Query, *, limit: int | None, offset: int) -> list[Hostname]:
        query = query.order_by(HostnameModel.created_at.desc(), HostnameModel.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: HostnameModel) -> Hostname:
        return Hostname(
            id=model.id,
            name=model.name,
            template_id=model.template_id,
            sequence_num=model.sequence_num,
            status=HostnameStatus(model.status),
            reserved_by=model.reserved_by,
            reserved_at=ensure_utc(model.reserved_at),
            committed_by=model.committed_by,
            committed_at=ensure_utc(model.committed_at),
            released_by=model.released_by,
            released_at=ensure_utc(model.released_at),
            dns_verified=model.dns_verified,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: HostnameModel, hostname: Hostname) -> None:
        now = now_utc()
        model.name = hostname.name
        model.template_id = hostname.template_id
        model.status = HostnameStatus(hostname.status).value
        model.sequence_num = hostname.sequence_num
        model.reserved_by = hostname.reserved_by
        model.reserved_at = ensure_utc(hostname.reserved_at) or now
        model.committed_by = hostname.committed_by
        model.committed_at = ensure_utc(hostname.committed_at)
        model.released_by = hostname.released_by
        model.released_at = ensure_utc(hostname.released_at)
        model.dns_verified = hostname.dns_verified
        model.created_at = ensure_utc(hostname.created_at) or now
        model.updated_at = now


__all__ = ["HostnameRepository"]

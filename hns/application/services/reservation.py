"""Hostname reservation and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from hns.application import naming
from hns.domain.entities import Hostname, HostnameStatus, Template
from hns.domain.errors import (
    AllocationExhaustedError,
    DuplicateHostnameError,
    HostnameNotFoundError,
    StateConflictError,
    TemplateNotFoundError,
    ValidationFailure,
)
from hns.domain.repositories import HostnameStore, TemplateStore
from hns.utils import now_utc

from .sequence import SequenceAllocator

MAX_RESERVE_ATTEMPTS = 2

# Columns accepted as exact-match filters by ``search``.
SEARCH_FILTER_FIELDS = frozenset(
    {
        "template_id",
        "status",
        "sequence_num",
        "reserved_by",
        "committed_by",
        "released_by",
        "dns_verified",
    }
)

# Allowed transitions: target status -> required current status.
_TRANSITIONS: dict[HostnameStatus, HostnameStatus] = {
    HostnameStatus.COMMITTED: HostnameStatus.RESERVED,
    HostnameStatus.RELEASED: HostnameStatus.COMMITTED,
}


class ReservationEngine:
    """Reserve hostnames and drive them through reserved → committed → released."""

    def __init__(
        self,
        template_store: TemplateStore,
        hostname_store: HostnameStore,
        *,
        allocator: SequenceAllocator | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.template_store = template_store
        self.hostname_store = hostname_store
        self.logger = logger or logging.getLogger(__name__)
        self.allocator = allocator or SequenceAllocator(
            template_store, hostname_store, logger=self.logger
        )

    def reserve(
        self,
        template_id: int,
        params: Mapping[str, str] | None,
        requested_by: str,
    ) -> Hostname:
        """Reserve the next free hostname of ``template_id`` for ``requested_by``."""

        if not requested_by or not requested_by.strip():
            raise ValidationFailure("requested_by is required")

        template = self._get_template(template_id)
        sequence_number = self.allocator.next_sequence(template_id, template=template)

        name = ""
        for attempt in range(1, MAX_RESERVE_ATTEMPTS + 1):
            if attempt > 1:
                sequence_number += template.sequence_increment
            name = naming.render(template, sequence_number, params, log=self.logger)

            if self.hostname_store.get_by_name(name) is not None:
                self.logger.info(
                    "Hostname %s already exists (sequence %s, attempt %s)",
                    name,
                    sequence_number,
                    attempt,
                )
                continue

            try:
                hostname = self.hostname_store.create(
                    Hostname(
                        id=None,
                        name=name,
                        template_id=template_id,
                        sequence_num=sequence_number,
                        status=HostnameStatus.RESERVED,
                        reserved_by=requested_by,
                        reserved_at=now_utc(),
                    )
                )
            except DuplicateHostnameError:
                self.logger.warning(
                    "Hostname %s was inserted concurrently (sequence %s, attempt %s)",
                    name,
                    sequence_number,
                    attempt,
                )
                continue

            self.logger.info(
                "Reserved hostname %s (template %s, sequence %s) for %s",
                hostname.name,
                template_id,
                sequence_number,
                requested_by,
            )
            return hostname

        raise AllocationExhaustedError(template_id, MAX_RESERVE_ATTEMPTS, name)

    def commit(self, hostname_id: int, committed_by: str) -> Hostname:
        """Move a ``reserved`` hostname to ``committed``."""

        return self._transition(hostname_id, HostnameStatus.COMMITTED, committed_by)

    def release(self, hostname_id: int, released_by: str) -> Hostname:
        """Move a ``committed`` hostname to ``released``."""

        return self._transition(hostname_id, HostnameStatus.RELEASED, released_by)

    def generate(
        self,
        template_id: int,
        sequence_number: int,
        params: Mapping[str, str] | None = None,
    ) -> str:
        """Render a hostname without reserving it."""

        template = self._get_template(template_id)
        return naming.preview(template, sequence_number, params, log=self.logger)

    def record_dns_verification(self, hostname_id: int, verified: bool) -> Hostname:
        if not self.hostname_store.set_dns_verified(hostname_id, verified):
            raise HostnameNotFoundError(hostname_id)
        return self.get(hostname_id)

    def get(self, hostname_id: int) -> Hostname:
        hostname = self.hostname_store.get(hostname_id)
        if hostname is None:
            raise HostnameNotFoundError(hostname_id)
        return hostname

    def get_by_name(self, name: str) -> Hostname:
        hostname = self.hostname_store.get_by_name(name)
        if hostname is None:
            raise HostnameNotFoundError(name)
        return hostname

    def list_by_status(
        self, status: HostnameStatus, *, limit: int = 100, offset: int = 0
    ) -> Sequence[Hostname]:
        return self.hostname_store.get_by_status(status, limit=limit, offset=offset)

    def list_by_template(
        self, template_id: int, *, limit: int = 100, offset: int = 0
    ) -> Sequence[Hostname]:
        return self.hostname_store.get_by_template_id(
            template_id, limit=limit, offset=offset
        )

    def search(
        self,
        filters: Mapping[str, Any] | None = None,
        *,
        name_contains: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[Sequence[Hostname], int]:
        """Return hostnames matching ``filters`` and the total match count."""

        filters = dict(filters or {})
        unknown = set(filters) - SEARCH_FILTER_FIELDS
        if unknown:
            raise ValidationFailure(
                f"Unsupported filter field(s): {', '.join(sorted(unknown))}"
            )
        if "status" in filters and filters["status"] is not None:
            try:
                filters["status"] = HostnameStatus(filters["status"])
            except ValueError as exc:
                raise ValidationFailure(f"Unknown status {filters['status']!r}") from exc
        filters = {key: value for key, value in filters.items() if value is not None}
        return self.hostname_store.list(
            filters=filters,
            name_contains=name_contains or None,
            limit=limit,
            offset=offset,
        )

    def count(
        self, *, template_id: int | None = None, status: HostnameStatus | None = None
    ) -> int:
        return self.hostname_store.count(template_id=template_id, status=status)

    def count_by_user(self, username: str) -> dict[HostnameStatus, int]:
        """Return how many hostnames ``username`` reserved, per status."""

        return {
            status: self.hostname_store.count_by_user(username, status)
            for status in (
                HostnameStatus.RESERVED,
                HostnameStatus.COMMITTED,
                HostnameStatus.RELEASED,
            )
        }

    def _transition(
        self, hostname_id: int, target: HostnameStatus, actor: str
    ) -> Hostname:
        if not actor or not actor.strip():
            raise ValidationFailure("The acting user is required")

        required = _TRANSITIONS[target]
        hostname = self.get(hostname_id)
        if hostname.status != required:
            raise StateConflictError(hostname_id, hostname.status, required)

        updated = self.hostname_store.update_status(
            hostname_id, status=target, expected_status=required, actor=actor
        )
        if not updated:
            # Another writer changed the row between our read and the update.
            current = self.get(hostname_id)
            raise StateConflictError(hostname_id, current.status, required)

        self.logger.info(
            "Hostname %s moved from %s to %s by %s",
            hostname.name,
            required.value,
            target.value,
            actor,
        )
        return self.get(hostname_id)

    def _get_template(self, template_id: int) -> Template:
        template = self.template_store.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template


__all__ = ["MAX_RESERVE_ATTEMPTS", "ReservationEngine", "SEARCH_FILTER_FIELDS"]

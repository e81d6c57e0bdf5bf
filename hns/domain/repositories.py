"""Persistence contracts consumed by the hostname core."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from .entities import Hostname, HostnameStatus, Template, TemplateGroup


class TemplateStore(Protocol):
    def get(self, template_id: int) -> Template | None: ...

    def get_by_name(self, name: str) -> Template | None: ...

    def list(self, *, limit: int = 100, offset: int = 0) -> tuple[Sequence[Template], int]: ...

    def create(self, template: Template) -> Template: ...

    def update(self, template: Template) -> Template: ...

    def delete(self, template_id: int) -> None: ...

    def get_groups(self, template_id: int) -> Sequence[TemplateGroup]: ...

    def create_group(self, group: TemplateGroup) -> TemplateGroup: ...

    def update_group(self, group: TemplateGroup) -> TemplateGroup: ...

    def delete_group(self, group_id: int) -> None: ...


class HostnameStore(Protocol):
    def create(self, hostname: Hostname) -> Hostname:
        """Persist ``hostname``; raise ``DuplicateHostnameError`` on a name clash."""

    def get(self, hostname_id: int) -> Hostname | None: ...

    def get_by_name(self, name: str) -> Hostname | None: ...

    def get_by_status(
        self, status: HostnameStatus, *, limit: int = 100, offset: int = 0
    ) -> Sequence[Hostname]: ...

    def get_by_template_id(
        self, template_id: int, *, limit: int | None = 100, offset: int = 0
    ) -> Sequence[Hostname]: ...

    def update_status(
        self,
        hostname_id: int,
        *,
        status: HostnameStatus,
        expected_status: HostnameStatus,
        actor: str,
    ) -> bool:
        """Transition the hostname only if it is still in ``expected_status``.

        Returns ``False`` when no row matched.
        """

    def set_dns_verified(self, hostname_id: int, verified: bool) -> bool: ...

    def get_next_sequence_number(self, template_id: int) -> int | None:
        """Return ``max(sequence_num) + 1`` or ``None`` when the template is unused."""

    def count(
        self, *, template_id: int | None = None, status: HostnameStatus | None = None
    ) -> int: ...

    def count_by_user(self, username: str, status: HostnameStatus) -> int: ...

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        name_contains: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[Sequence[Hostname], int]: ...


__all__ = ["HostnameStore", "TemplateStore"]

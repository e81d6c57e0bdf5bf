"""In-memory doubles and template builders shared by the test suites."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from itertools import count

from hns.domain.entities import (
    FixedRule,
    Hostname,
    HostnameStatus,
    ListRule,
    ProbeResult,
    RegexRule,
    SequenceRule,
    Template,
    TemplateGroup,
)
from hns.domain.errors import DuplicateHostnameError, ResolutionUnavailableError
from hns.utils import now_utc


def make_template(
    *,
    template_id: int = 1,
    name: str = "servers",
    max_length: int = 15,
    sequence_start: int = 1,
    sequence_length: int = 3,
    sequence_padding: bool = True,
    sequence_increment: int = 1,
    groups: list[TemplateGroup] | None = None,
) -> Template:
    """Build a ``<site><role><seq>`` template unless ``groups`` is given."""

    if groups is None:
        groups = [
            TemplateGroup(
                id=1,
                template_id=template_id,
                name="site",
                length=3,
                position=1,
                is_required=True,
                rule=ListRule(values=("nyc", "lon")),
            ),
            TemplateGroup(
                id=2,
                template_id=template_id,
                name="role",
                length=3,
                position=2,
                is_required=False,
                rule=RegexRule(pattern="^[a-z]+$"),
            ),
            TemplateGroup(
                id=3,
                template_id=template_id,
                name="seq",
                length=sequence_length,
                position=3,
                is_required=True,
                rule=SequenceRule(),
            ),
        ]
    return Template(
        id=template_id,
        name=name,
        description=None,
        max_length=max_length,
        sequence_start=sequence_start,
        sequence_length=sequence_length,
        sequence_padding=sequence_padding,
        sequence_increment=sequence_increment,
        created_by="tester",
        created_at=now_utc(),
        updated_by=None,
        updated_at=None,
        is_active=True,
        groups=groups,
    )


def make_simple_template(*, template_id: int = 1, prefix: str = "srv", **kwargs) -> Template:
    """Build a ``<prefix><seq>`` template with a fixed prefix."""

    sequence_length = kwargs.pop("sequence_length", 3)
    groups = [
        TemplateGroup(
            id=1,
            template_id=template_id,
            name="prefix",
            length=len(prefix),
            position=1,
            is_required=True,
            rule=FixedRule(value=prefix),
        ),
        TemplateGroup(
            id=2,
            template_id=template_id,
            name="seq",
            length=sequence_length,
            position=2,
            is_required=True,
            rule=SequenceRule(),
        ),
    ]
    return make_template(
        template_id=template_id,
        sequence_length=sequence_length,
        groups=groups,
        **kwargs,
    )


class InMemoryTemplateStore:
    def __init__(self, *templates: Template) -> None:
        self.templates = {template.id: template for template in templates}
        self._ids = count(max(self.templates, default=0) + 1)

    def get(self, template_id):
        return self.templates.get(template_id)

    def get_by_name(self, name):
        for template in self.templates.values():
            if template.name.lower() == name.strip().lower():
                return template
        return None

    def list(self, *, limit=100, offset=0):
        items = list(self.templates.values())
        return items[offset : offset + limit], len(items)

    def create(self, template):
        created = replace(template, id=next(self._ids))
        self.templates[created.id] = created
        return created

    def update(self, template):
        self.templates[template.id] = template
        return template

    def delete(self, template_id):
        self.templates.pop(template_id, None)

    def get_groups(self, template_id):
        return self.templates[template_id].ordered_groups()

    def create_group(self, group):
        self.templates[group.template_id].groups.append(group)
        return group

    def update_group(self, group):
        return group

    def delete_group(self, group_id):
        for template in self.templates.values():
            template.groups = [g for g in template.groups if g.id != group_id]


class InMemoryHostnameStore:
    """Hostname store that mirrors the conditional-update semantics of the DB."""

    def __init__(self) -> None:
        self.hostnames: dict[int, Hostname] = {}
        self._ids = count(1)
        self.create_calls: list[str] = []

    def add(self, name, template_id=1, sequence_num=1, status=HostnameStatus.RESERVED):
        return self.create(
            Hostname(
                id=None,
                name=name,
                template_id=template_id,
                sequence_num=sequence_num,
                status=status,
                reserved_by="seed",
                reserved_at=now_utc(),
            )
        )

    def create(self, hostname):
        self.create_calls.append(hostname.name)
        if self.get_by_name(hostname.name) is not None:
            raise DuplicateHostnameError(hostname.name)
        created = replace(hostname, id=next(self._ids), created_at=now_utc())
        self.hostnames[created.id] = created
        return created

    def get(self, hostname_id):
        return self.hostnames.get(hostname_id)

    def get_by_name(self, name):
        for hostname in self.hostnames.values():
            if hostname.name == name:
                return hostname
        return None

    def get_by_status(self, status, *, limit=100, offset=0):
        items = [h for h in self.hostnames.values() if h.status == status]
        return items[offset : offset + limit]

    def get_by_template_id(self, template_id, *, limit=100, offset=0):
        items = [h for h in self.hostnames.values() if h.template_id == template_id]
        if limit is None:
            return items[offset:]
        return items[offset : offset + limit]

    def update_status(self, hostname_id, *, status, expected_status, actor):
        current = self.hostnames.get(hostname_id)
        if current is None or current.status != expected_status:
            return False
        changes = {"status": status, "updated_at": now_utc()}
        if status is HostnameStatus.COMMITTED:
            changes.update(committed_by=actor, committed_at=now_utc())
        elif status is HostnameStatus.RELEASED:
            changes.update(released_by=actor, released_at=now_utc())
        self.hostnames[hostname_id] = replace(current, **changes)
        return True

    def set_dns_verified(self, hostname_id, verified):
        current = self.hostnames.get(hostname_id)
        if current is None:
            return False
        self.hostnames[hostname_id] = replace(current, dns_verified=verified)
        return True

    def get_next_sequence_number(self, template_id):
        numbers = [
            h.sequence_num for h in self.hostnames.values() if h.template_id == template_id
        ]
        return max(numbers) + 1 if numbers else None

    def count(self, *, template_id=None, status=None):
        return sum(
            1
            for h in self.hostnames.values()
            if (template_id is None or h.template_id == template_id)
            and (status is None or h.status == status)
        )

    def count_by_user(self, username, status):
        return sum(
            1
            for h in self.hostnames.values()
            if h.reserved_by == username and h.status == status
        )

    def list(self, *, filters=None, name_contains=None, limit=100, offset=0):
        items = [
            h
            for h in self.hostnames.values()
            if all(getattr(h, key) == value for key, value in (filters or {}).items())
            and (not name_contains or name_contains in h.name)
        ]
        return items[offset : offset + limit], len(items)


class FakeProbe:
    """Probe answering from a fixed set of existing names and recording concurrency."""

    def __init__(self, existing=(), *, failing=(), delay: float = 0.0) -> None:
        self.existing = set(existing)
        self.failing = set(failing)
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def check(self, hostname: str) -> ProbeResult:
        self.calls.append(hostname)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if hostname in self.failing:
                raise ResolutionUnavailableError(f"All DNS servers failed for {hostname}")
            exists = hostname in self.existing
            return ProbeResult(
                hostname=hostname,
                exists=exists,
                ip_address="10.0.0.1" if exists else None,
                verified_at=now_utc(),
            )
        finally:
            self.in_flight -= 1

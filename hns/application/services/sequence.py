"""Sequence number allocation for hostname templates."""

from __future__ import annotations

import logging

from hns.domain.entities import HostnameStatus, SequenceUsage, Template
from hns.domain.errors import TemplateNotFoundError
from hns.domain.repositories import HostnameStore, TemplateStore


class SequenceAllocator:
    """Compute the next unused sequence number of a template.

    The allocator is advisory: it reads the highest stored sequence number and
    never locks it. Uniqueness is enforced when the hostname is inserted.
    """

    def __init__(
        self,
        template_store: TemplateStore,
        hostname_store: HostnameStore,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.template_store = template_store
        self.hostname_store = hostname_store
        self.logger = logger or logging.getLogger(__name__)

    def next_sequence(self, template_id: int, *, template: Template | None = None) -> int:
        """Return ``max(sequence_num) + 1`` or the template's ``sequence_start``."""

        if template is None:
            template = self._get_template(template_id)
        next_number = self.hostname_store.get_next_sequence_number(template_id)
        if next_number is None:
            return template.sequence_start
        return next_number

    def usage(self, template_id: int) -> SequenceUsage:
        """Summarize how the template's sequence space is used."""

        template = self._get_template(template_id)
        hostnames = self.hostname_store.get_by_template_id(template_id, limit=None)
        if not hostnames:
            return SequenceUsage(
                template_id=template_id,
                total_sequences=0,
                used_sequences=0,
                next_sequence=template.sequence_start,
                highest_sequence=0,
                lowest_sequence=0,
            )

        numbers = [hostname.sequence_num for hostname in hostnames]
        used = sum(
            1
            for hostname in hostnames
            if hostname.status in (HostnameStatus.RESERVED, HostnameStatus.COMMITTED)
        )
        return SequenceUsage(
            template_id=template_id,
            total_sequences=len(hostnames),
            used_sequences=used,
            next_sequence=self.next_sequence(template_id, template=template),
            highest_sequence=max(numbers),
            lowest_sequence=min(numbers),
        )

    def find_gaps(self, template_id: int, max_gaps: int = 100) -> list[int]:
        """Return unused numbers between the lowest and highest stored sequence."""

        self._get_template(template_id)
        hostnames = self.hostname_store.get_by_template_id(template_id, limit=None)
        if not hostnames or max_gaps <= 0:
            return []

        used = {hostname.sequence_num for hostname in hostnames}
        gaps: list[int] = []
        for number in range(min(used), max(used) + 1):
            if number not in used:
                gaps.append(number)
                if len(gaps) >= max_gaps:
                    break
        return gaps

    def _get_template(self, template_id: int) -> Template:
        template = self.template_store.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template


__all__ = ["SequenceAllocator"]

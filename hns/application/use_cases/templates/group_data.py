"""Input payloads shared by template use cases."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from hns.domain.entities import TemplateGroup, ValidationType, rule_from_storage
from hns.domain.errors import TemplateDefinitionError


@dataclass(frozen=True)
class NewTemplateGroupData:
    """Data required to create a template group."""

    name: str
    length: int
    validation_type: str
    validation_value: str = ""
    is_required: bool = False


def build_groups(
    payloads: Sequence[NewTemplateGroupData], *, template_id: int | None = None
) -> list[TemplateGroup]:
    """Turn request payloads into groups positioned in request order (1-based)."""

    groups: list[TemplateGroup] = []
    seen_names: set[str] = set()
    for position, payload in enumerate(payloads, start=1):
        name = payload.name.strip()
        if not name:
            raise TemplateDefinitionError("Group name cannot be empty")
        if name.lower() in seen_names:
            raise TemplateDefinitionError(f"Duplicate group name {name!r}")
        seen_names.add(name.lower())

        try:
            ValidationType(payload.validation_type)
            rule = rule_from_storage(payload.validation_type, payload.validation_value)
        except ValueError as exc:
            raise TemplateDefinitionError(str(exc)) from exc

        groups.append(
            TemplateGroup(
                id=None,
                template_id=template_id,
                name=name,
                length=payload.length,
                position=position,
                is_required=payload.is_required,
                rule=rule,
            )
        )
    return groups


__all__ = ["NewTemplateGroupData", "build_groups"]

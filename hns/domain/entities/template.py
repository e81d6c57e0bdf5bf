"""Domain entities describing hostname templates and their groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ValidationType(str, Enum):
    """Persisted discriminator for a group rule."""

    REGEX = "regex"
    LIST = "list"
    FIXED = "fixed"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class RegexRule:
    """Accept caller values matching ``pattern``."""

    pattern: str

    kind = ValidationType.REGEX

    def to_storage(self) -> tuple[ValidationType, str]:
        return self.kind, self.pattern


@dataclass(frozen=True)
class ListRule:
    """Accept caller values that equal one of ``values``."""

    values: tuple[str, ...]

    kind = ValidationType.LIST

    @classmethod
    def parse(cls, raw: str) -> "ListRule":
        """Build the rule from a comma-separated allow-list."""

        tokens = tuple(token.strip() for token in raw.split(",")) if raw else ()
        return cls(values=tuple(token for token in tokens if token))

    def to_storage(self) -> tuple[ValidationType, str]:
        return self.kind, ",".join(self.values)


@dataclass(frozen=True)
class FixedRule:
    """Always render ``value`` verbatim."""

    value: str

    kind = ValidationType.FIXED

    def to_storage(self) -> tuple[ValidationType, str]:
        return self.kind, self.value


@dataclass(frozen=True)
class SequenceRule:
    """Render the formatted sequence number."""

    kind = ValidationType.SEQUENCE

    def to_storage(self) -> tuple[ValidationType, str]:
        return self.kind, ""


GroupRule = RegexRule | ListRule | FixedRule | SequenceRule


def rule_from_storage(validation_type: str, validation_value: str | None) -> GroupRule:
    """Rebuild a group rule from its persisted ``validation_type``/``validation_value``."""

    try:
        kind = ValidationType(validation_type)
    except ValueError as exc:
        raise ValueError(f"Unknown validation type: {validation_type!r}") from exc

    value = validation_value or ""
    if kind is ValidationType.REGEX:
        return RegexRule(pattern=value)
    if kind is ValidationType.LIST:
        return ListRule.parse(value)
    if kind is ValidationType.FIXED:
        return FixedRule(value=value)
    return SequenceRule()


@dataclass
class TemplateGroup:
    """One positional segment of a hostname."""

    id: int | None
    template_id: int | None
    name: str
    length: int
    position: int
    is_required: bool
    rule: GroupRule

    @property
    def validation_type(self) -> ValidationType:
        return self.rule.kind

    @property
    def validation_value(self) -> str:
        return self.rule.to_storage()[1]


@dataclass
class Template:
    """Blueprint used to render hostnames."""

    id: int | None
    name: str
    description: str | None
    max_length: int
    sequence_start: int
    sequence_length: int
    sequence_padding: bool
    sequence_increment: int
    created_by: str | None
    created_at: datetime | None
    updated_by: str | None
    updated_at: datetime | None
    is_active: bool
    groups: list[TemplateGroup] = field(default_factory=list)

    def ordered_groups(self) -> list[TemplateGroup]:
        """Return the groups sorted by ascending ``position``."""

        return sorted(self.groups, key=lambda group: group.position)

    @property
    def sequence_group(self) -> TemplateGroup | None:
        for group in self.groups:
            if isinstance(group.rule, SequenceRule):
                return group
        return None


__all__ = [
    "FixedRule",
    "GroupRule",
    "ListRule",
    "RegexRule",
    "SequenceRule",
    "Template",
    "TemplateGroup",
    "ValidationType",
    "rule_from_storage",
]

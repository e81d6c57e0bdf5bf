"""Render hostnames from template definitions.

Rendering is a pure function of ``(template, sequence_number, params)``: the
same inputs always produce the same name. Caller values that fail a group's
rule are not rejected outright; required groups fall back to a deterministic
placeholder and optional groups render empty, mirroring how operators expect
partially filled requests to still yield a usable name.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from hns.domain.entities import (
    FixedRule,
    ListRule,
    RegexRule,
    SequenceRule,
    Template,
    TemplateGroup,
)
from hns.domain.errors import NameLengthExceededError, TemplateDefinitionError

logger = logging.getLogger(__name__)

_FALLBACK_VALUE = "X"


def format_sequence(number: int, length: int, padding: bool) -> str:
    """Format ``number`` as ``length`` zero-padded digits when ``padding`` is set."""

    if padding:
        return str(number).zfill(length)
    return str(number)


def render(
    template: Template,
    sequence_number: int,
    params: Mapping[str, str] | None = None,
    *,
    log: logging.Logger | None = None,
) -> str:
    """Return the hostname for ``sequence_number`` or raise ``NameLengthExceededError``."""

    log = log or logger
    params = params or {}
    sequence_value = format_sequence(
        sequence_number, template.sequence_length, template.sequence_padding
    )

    parts: list[str] = []
    for group in template.ordered_groups():
        value = _resolve_group(group, sequence_value, params, log)
        # Sequence digits are never truncated; overflow is reported by the
        # max_length check below.
        if (
            not isinstance(group.rule, SequenceRule)
            and group.length > 0
            and len(value) > group.length
        ):
            value = value[: group.length]
        parts.append(value)

    name = "".join(parts)
    if len(name) > template.max_length:
        raise NameLengthExceededError(name, template.max_length)
    return name


def preview(
    template: Template,
    sequence_number: int,
    params: Mapping[str, str] | None = None,
    *,
    log: logging.Logger | None = None,
) -> str:
    """Render a name, using ``sequence_start`` when ``sequence_number`` is not positive."""

    if sequence_number <= 0:
        sequence_number = template.sequence_start
    return render(template, sequence_number, params, log=log)


def _resolve_group(
    group: TemplateGroup,
    sequence_value: str,
    params: Mapping[str, str],
    log: logging.Logger,
) -> str:
    rule = group.rule
    if isinstance(rule, FixedRule):
        return rule.value
    if isinstance(rule, SequenceRule):
        return sequence_value

    supplied = params.get(group.name)
    if supplied is None:
        if not group.is_required:
            return ""
        log.warning("Required group parameter %r not provided", group.name)
        if isinstance(rule, ListRule) and rule.values:
            return rule.values[0]
        return _FALLBACK_VALUE

    if isinstance(rule, RegexRule):
        if not rule.pattern or re.search(rule.pattern, supplied):
            return supplied
        log.warning(
            "Group %r value %r does not match validation pattern %r",
            group.name,
            supplied,
            rule.pattern,
        )
    elif isinstance(rule, ListRule):
        if not rule.values or supplied in rule.values:
            return supplied
        log.warning(
            "Group %r value %r not in allowed list %s",
            group.name,
            supplied,
            ",".join(rule.values),
        )

    return _required_fallback(rule) if group.is_required else ""


def _required_fallback(rule: RegexRule | ListRule) -> str:
    if isinstance(rule, ListRule):
        return rule.values[0] if rule.values else _FALLBACK_VALUE
    return rule.pattern[0] if rule.pattern else _FALLBACK_VALUE


def validate_template(template: Template, *, log: logging.Logger | None = None) -> None:
    """Raise ``TemplateDefinitionError`` when ``template`` breaks a structural invariant."""

    log = log or logger
    if template.max_length <= 0:
        raise TemplateDefinitionError("Template max length must be positive")
    if template.sequence_length <= 0:
        raise TemplateDefinitionError("Sequence length must be positive")
    if template.sequence_increment <= 0:
        raise TemplateDefinitionError("Sequence increment must be positive")
    if template.sequence_start < 0:
        raise TemplateDefinitionError("Sequence start cannot be negative")

    positions = [group.position for group in template.groups]
    if len(positions) != len(set(positions)):
        raise TemplateDefinitionError("Group positions must be unique")
    if any(position < 1 for position in positions):
        raise TemplateDefinitionError("Group positions are 1-based")

    total_length = sum(group.length for group in template.groups)
    if total_length > template.max_length:
        raise TemplateDefinitionError(
            f"Sum of group lengths ({total_length}) exceeds template max length "
            f"({template.max_length})"
        )

    for group in template.groups:
        if group.length <= 0:
            raise TemplateDefinitionError(f"Group {group.name!r} length must be positive")
        if isinstance(group.rule, RegexRule) and group.rule.pattern:
            try:
                re.compile(group.rule.pattern)
            except re.error as exc:
                raise TemplateDefinitionError(
                    f"Group {group.name!r} has an invalid pattern: {exc}"
                ) from exc

    sequence_groups = [g for g in template.groups if isinstance(g.rule, SequenceRule)]
    if len(sequence_groups) > 1:
        raise TemplateDefinitionError("A template can define only one sequence group")
    if not sequence_groups:
        log.warning(
            "Template %r has no sequence group; every rendered name will be identical",
            template.name,
        )


__all__ = ["format_sequence", "preview", "render", "validate_template"]

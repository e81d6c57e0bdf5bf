"""Use case for updating templates."""

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from hns.application.naming import validate_template
from hns.domain.entities import Template
from hns.domain.errors import TemplateDefinitionError, TemplateNotFoundError
from hns.infrastructure.repositories import TemplateRepository
from hns.utils import now_utc

from .group_data import NewTemplateGroupData, build_groups


def update_template(
    session: Session,
    *,
    template_id: int,
    updated_by: str,
    name: str | None = None,
    description: str | None = None,
    max_length: int | None = None,
    sequence_start: int | None = None,
    sequence_length: int | None = None,
    sequence_padding: bool | None = None,
    sequence_increment: int | None = None,
    is_active: bool | None = None,
    groups: Sequence[NewTemplateGroupData] | None = None,
) -> Template:
    """Update a template; when ``groups`` is given it replaces the existing groups.

    Raises:
        TemplateNotFoundError: If the template does not exist.
        TemplateDefinitionError: If the resulting definition is invalid or the
            new name collides with another template.
    """

    repository = TemplateRepository(session)
    current = repository.get(template_id)
    if current is None:
        raise TemplateNotFoundError(template_id)

    new_name = current.name
    if name is not None:
        new_name = name.strip()
        if not new_name:
            raise TemplateDefinitionError("Template name cannot be empty")
        existing = repository.get_by_name(new_name)
        if existing is not None and existing.id != template_id:
            raise TemplateDefinitionError("Template name is already in use")

    new_groups = current.groups
    if groups is not None:
        new_groups = build_groups(groups, template_id=template_id)

    candidate = replace(
        current,
        name=new_name,
        description=description if description is not None else current.description,
        max_length=max_length if max_length is not None else current.max_length,
        sequence_start=(
            sequence_start if sequence_start is not None else current.sequence_start
        ),
        sequence_length=(
            sequence_length if sequence_length is not None else current.sequence_length
        ),
        sequence_padding=(
            sequence_padding if sequence_padding is not None else current.sequence_padding
        ),
        sequence_increment=(
            sequence_increment
            if sequence_increment is not None
            else current.sequence_increment
        ),
        is_active=is_active if is_active is not None else current.is_active,
        updated_by=updated_by,
        updated_at=now_utc(),
        groups=new_groups,
    )
    validate_template(candidate)

    if groups is not None:
        for group in current.groups:
            repository.delete_group(group.id)
        for group in new_groups:
            repository.create_group(group)

    return repository.update(candidate)


__all__ = ["update_template"]

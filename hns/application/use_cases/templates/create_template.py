"""Use case for creating templates."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from hns.application.naming import validate_template
from hns.domain.entities import Template
from hns.domain.errors import TemplateDefinitionError
from hns.infrastructure.repositories import TemplateRepository
from hns.utils import now_utc

from .group_data import NewTemplateGroupData, build_groups


def create_template(
    session: Session,
    *,
    name: str,
    max_length: int,
    sequence_length: int,
    groups: Sequence[NewTemplateGroupData],
    sequence_start: int = 1,
    sequence_padding: bool = True,
    sequence_increment: int = 1,
    description: str | None = None,
    created_by: str | None = None,
) -> Template:
    """Validate and persist a new template together with its groups."""

    repository = TemplateRepository(session)

    normalized_name = name.strip()
    if not normalized_name:
        raise TemplateDefinitionError("Template name cannot be empty")

    if repository.get_by_name(normalized_name) is not None:
        raise TemplateDefinitionError("Template name is already in use")

    template = Template(
        id=None,
        name=normalized_name,
        description=description,
        max_length=max_length,
        sequence_start=sequence_start,
        sequence_length=sequence_length,
        sequence_padding=sequence_padding,
        sequence_increment=sequence_increment,
        created_by=created_by,
        created_at=now_utc(),
        updated_by=None,
        updated_at=None,
        is_active=True,
        groups=build_groups(groups),
    )
    validate_template(template)
    return repository.create(template)


__all__ = ["create_template"]

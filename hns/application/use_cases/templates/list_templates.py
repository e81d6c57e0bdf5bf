"""Use case for listing templates."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from hns.domain.entities import Template
from hns.infrastructure.repositories import TemplateRepository


def list_templates(
    session: Session,
    *,
    skip: int = 0,
    limit: int = 100,
) -> tuple[Sequence[Template], int]:
    """Return a page of templates and the total number of templates."""

    repository = TemplateRepository(session)
    return repository.list(limit=limit, offset=skip)


__all__ = ["list_templates"]

"""Use case for deleting templates."""

import logging

from sqlalchemy.orm import Session

from hns.domain.errors import TemplateInUseError, TemplateNotFoundError
from hns.infrastructure.repositories import HostnameRepository, TemplateRepository

logger = logging.getLogger(__name__)


def delete_template(session: Session, template_id: int) -> None:
    """Delete the template unless hostnames still reference it."""

    repository = TemplateRepository(session)
    template = repository.get(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)

    in_use = HostnameRepository(session).count(template_id=template_id)
    if in_use:
        raise TemplateInUseError(
            f"Cannot delete template {template.name!r}: {in_use} hostname(s) were "
            "generated from it and must be deleted first"
        )

    repository.delete(template_id)
    logger.info("Template %s (%s) deleted", template_id, template.name)


__all__ = ["delete_template"]

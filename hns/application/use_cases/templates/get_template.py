"""Use case for retrieving a template."""

from sqlalchemy.orm import Session

from hns.domain.entities import Template
from hns.domain.errors import TemplateNotFoundError
from hns.infrastructure.repositories import TemplateRepository


def get_template(session: Session, template_id: int) -> Template:
    """Return the template identified by ``template_id`` or raise an error."""

    repository = TemplateRepository(session)
    template = repository.get(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    return template


__all__ = ["get_template"]

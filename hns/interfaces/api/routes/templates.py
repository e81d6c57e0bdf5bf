"""Routes to manage hostname templates and their groups."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from hns.application.use_cases.templates import (
    NewTemplateGroupData,
    create_template as create_template_uc,
    delete_template as delete_template_uc,
    get_template as get_template_uc,
    list_templates as list_templates_uc,
    update_template as update_template_uc,
)
from hns.domain.entities import Template
from hns.domain.errors import HNSError
from hns.interfaces.api.dependencies import get_db
from hns.interfaces.api.routes_helpers import to_http_exception
from hns.interfaces.api.schemas import (
    TemplateCreate,
    TemplateGroupCreate,
    TemplateList,
    TemplateRead,
    TemplateUpdate,
)

router = APIRouter(prefix="/templates", tags=["templates"])


def _template_to_read_model(template: Template) -> TemplateRead:
    return TemplateRead.model_validate(template)


def _map_group_payload(groups: list[TemplateGroupCreate]) -> list[NewTemplateGroupData]:
    return [
        NewTemplateGroupData(
            name=group.name,
            length=group.length,
            validation_type=group.validation_type,
            validation_value=group.validation_value,
            is_required=group.is_required,
        )
        for group in groups
    ]


@router.post("/", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def register_template(
    template_in: TemplateCreate,
    db: Session = Depends(get_db),
) -> TemplateRead:
    """Create a template together with its ordered groups."""

    try:
        template = create_template_uc(
            db,
            name=template_in.name,
            description=template_in.description,
            max_length=template_in.max_length,
            sequence_start=template_in.sequence_start,
            sequence_length=template_in.sequence_length,
            sequence_padding=template_in.sequence_padding,
            sequence_increment=template_in.sequence_increment,
            groups=_map_group_payload(template_in.groups),
            created_by=template_in.created_by,
        )
    except HNSError as exc:
        raise to_http_exception(exc) from exc

    return _template_to_read_model(template)


@router.get("/", response_model=TemplateList)
def list_templates(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, gt=0, le=1000),
    db: Session = Depends(get_db),
) -> TemplateList:
    """Return a page of templates and the total count."""

    templates, total = list_templates_uc(db, skip=skip, limit=limit)
    return TemplateList(
        items=[_template_to_read_model(template) for template in templates],
        total=total,
    )


@router.get("/{template_id}", response_model=TemplateRead)
def read_template(template_id: int, db: Session = Depends(get_db)) -> TemplateRead:
    try:
        template = get_template_uc(db, template_id)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_read_model(template)


@router.put("/{template_id}", response_model=TemplateRead)
def update_template(
    template_id: int,
    template_in: TemplateUpdate,
    db: Session = Depends(get_db),
) -> TemplateRead:
    """Update template fields; a ``groups`` list replaces every existing group."""

    groups = (
        _map_group_payload(template_in.groups) if template_in.groups is not None else None
    )
    try:
        template = update_template_uc(
            db,
            template_id=template_id,
            updated_by=template_in.updated_by,
            name=template_in.name,
            description=template_in.description,
            max_length=template_in.max_length,
            sequence_start=template_in.sequence_start,
            sequence_length=template_in.sequence_length,
            sequence_padding=template_in.sequence_padding,
            sequence_increment=template_in.sequence_increment,
            is_active=template_in.is_active,
            groups=groups,
        )
    except HNSError as exc:
        raise to_http_exception(exc) from exc

    return _template_to_read_model(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: int, db: Session = Depends(get_db)) -> Response:
    try:
        delete_template_uc(db, template_id)
    except HNSError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Persistence layer for templates and their groups."""

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from hns.domain.entities import Template, TemplateGroup, rule_from_storage
from hns.infrastructure.models import TemplateGroupModel, TemplateModel
from hns.utils import ensure_utc, now_utc


class TemplateRepository:
    """Provide CRUD operations for templates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, limit: int = 100, offset: int = 0) -> tuple[Sequence[Template], int]:
        total = self.session.query(func.count(TemplateModel.id)).scalar() or 0
        query = (
            self.session.query(TemplateModel)
            .options(selectinload(TemplateModel.groups))
            .order_by(TemplateModel.created_at.desc(), TemplateModel.id.desc())
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def get(self, template_id: int) -> Template | None:
        model = self._get_model(id=template_id)
        return self._to_entity(model) if model else None

    def get_by_name(self, name: str) -> Template | None:
        normalized_name = name.strip().lower()
        model = (
            self.session.query(TemplateModel)
            .options(selectinload(TemplateModel.groups))
            .filter(func.lower(TemplateModel.name) == normalized_name)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, template: Template) -> Template:
        model = TemplateModel()
        self._apply_entity_to_model(model, template, include_creation_fields=True)
        for group in template.groups:
            group_model = TemplateGroupModel()
            self._apply_group_to_model(group_model, group)
            model.groups.append(group_model)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, template: Template) -> Template:
        model = self._get_model(id=template.id)
        if not model:
            msg = f"Template with id {template.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, template, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, template_id: int) -> None:
        model = self._get_model(id=template_id)
        if not model:
            msg = f"Template with id {template_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def get_groups(self, template_id: int) -> Sequence[TemplateGroup]:
        query = (
            self.session.query(TemplateGroupModel)
            .filter(TemplateGroupModel.template_id == template_id)
            .order_by(TemplateGroupModel.position.asc())
        )
        return [self._group_to_entity(model) for model in query.all()]

    def create_group(self, group: TemplateGroup) -> TemplateGroup:
        model = TemplateGroupModel()
        self._apply_group_to_model(model, group)
        model.template_id = group.template_id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._group_to_entity(model)

    def update_group(self, group: TemplateGroup) -> TemplateGroup:
        model = self.session.get(TemplateGroupModel, group.id)
        if not model:
            msg = f"Template group with id {group.id} not found"
            raise ValueError(msg)
        self._apply_group_to_model(model, group)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._group_to_entity(model)

    def delete_group(self, group_id: int) -> None:
        model = self.session.get(TemplateGroupModel, group_id)
        if not model:
            msg = f"Template group with id {group_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def _get_model(self, **filters) -> TemplateModel | None:
        query = self.session.query(TemplateModel).options(
            selectinload(TemplateModel.groups)
        )
        return query.filter_by(**filters).first()

    @staticmethod
    def _to_entity(model: TemplateModel) -> Template:
        groups = sorted(
            (TemplateRepository._group_to_entity(group) for group in model.groups),
            key=lambda group: group.position,
        )
        return Template(
            id=model.id,
            name=model.name,
            description=model.description,
            max_length=model.max_length,
            sequence_start=model.sequence_start,
            sequence_length=model.sequence_length,
            sequence_padding=model.sequence_padding,
            sequence_increment=model.sequence_increment,
            created_by=model.created_by,
            created_at=ensure_utc(model.created_at),
            updated_by=model.updated_by,
            updated_at=ensure_utc(model.updated_at),
            is_active=model.is_active,
            groups=groups,
        )

    @staticmethod
    def _group_to_entity(model: TemplateGroupModel) -> TemplateGroup:
        return TemplateGroup(
            id=model.id,
            template_id=model.template_id,
            name=model.name,
            length=model.length,
            position=model.position,
            is_required=model.is_required,
            rule=rule_from_storage(model.validation_type, model.validation_value),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: TemplateModel,
        template: Template,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_by = template.created_by
            model.created_at = ensure_utc(template.created_at) or now_utc()
            model.updated_by = None
            model.updated_at = None
        model.name = template.name
        model.description = template.description
        model.max_length = template.max_length
        model.sequence_start = template.sequence_start
        model.sequence_length = template.sequence_length
        model.sequence_padding = template.sequence_padding
        model.sequence_increment = template.sequence_increment
        if not include_creation_fields:
            model.updated_by = template.updated_by
            model.updated_at = ensure_utc(template.updated_at)
        model.is_active = template.is_active

    @staticmethod
    def _apply_group_to_model(model: TemplateGroupModel, group: TemplateGroup) -> None:
        validation_type, validation_value = group.rule.to_storage()
        model.name = group.name
        model.length = group.length
        model.position = group.position
        model.is_required = group.is_required
        model.validation_type = validation_type.value
        model.validation_value = validation_value


__all__ = ["TemplateRepository"]

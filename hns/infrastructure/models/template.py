"""SQLAlchemy models for templates and template groups."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from hns.infrastructure.database import Base
from hns.utils import now_utc


class TemplateModel(Base):
    """Database representation of a hostname template."""

    __tablename__ = "templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(255), nullable=True)
    max_length = Column(Integer, nullable=False)
    sequence_start = Column(Integer, nullable=False, default=1)
    sequence_length = Column(Integer, nullable=False)
    sequence_padding = Column(Boolean, nullable=False, default=True)
    sequence_increment = Column(Integer, nullable=False, default=1)
    created_by = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated_by = Column(String(100), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=now_utc)
    is_active = Column(Boolean, nullable=False, default=True)

    groups = relationship(
        "TemplateGroupModel",
        back_populates="template",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TemplateGroupModel.position",
    )


class TemplateGroupModel(Base):
    """Database representation of one positional template group."""

    __tablename__ = "template_groups"
    __table_args__ = (
        UniqueConstraint("template_id", "position", name="uq_template_group_position"),
    )

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer,
        ForeignKey("templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(50), nullable=False)
    length = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False)
    is_required = Column(Boolean, nullable=False, default=False)
    validation_type = Column(String(20), nullable=False)
    validation_value = Column(String(255), nullable=False, default="")

    template = relationship("TemplateModel", back_populates="groups")


__all__ = ["TemplateGroupModel", "TemplateModel"]

"""SQLAlchemy model for generated hostnames."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String

from hns.infrastructure.database import Base
from hns.utils import now_utc


class HostnameModel(Base):
    """Database representation of a reserved hostname."""

    __tablename__ = "hostnames"
    __table_args__ = (
        Index("ix_hostnames_template_sequence", "template_id", "sequence_num"),
    )

    id = Column(Integer, primary_key=True, index=True)
    # The unique index is the guard against concurrent reservations of one name.
    name = Column(String(255), nullable=False, unique=True)
    template_id = Column(
        Integer,
        ForeignKey("templates.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    status = Column(String(20), nullable=False, index=True)
    sequence_num = Column(Integer, nullable=False)
    reserved_by = Column(String(100), nullable=False, index=True)
    reserved_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    committed_by = Column(String(100), nullable=True)
    committed_at = Column(DateTime(timezone=True), nullable=True)
    released_by = Column(String(100), nullable=True)
    released_at = Column(DateTime(timezone=True), nullable=True)
    dns_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=now_utc, onupdate=now_utc
    )


__all__ = ["HostnameModel"]

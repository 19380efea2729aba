"""Models tracking user reports and the moderation queue."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_commons.db.session import Base
from campus_commons.db.time import utcnow
from campus_commons.models.enums import (
    EntityType,
    QueueStatus,
    ReportReason,
    ReportStatus,
    enum_column,
)
from campus_commons.models.user import User


class Report(Base):
    """A single user's complaint about a piece of content."""

    __tablename__ = "reports"
    __table_args__ = (
        Index("ix_reports_entity_status", "entity_type", "entity_id", "status"),
        Index("ix_reports_reporter_entity", "reporter_id", "entity_type", "entity_id"),
        # At most one pending report per reporter and entity.
        Index(
            "uq_reports_pending_reporter_entity",
            "reporter_id",
            "entity_type",
            "entity_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reporter_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    # Polymorphic reference; resolved through the entity registry.
    entity_type: Mapped[EntityType] = mapped_column(enum_column(EntityType), nullable=False)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[ReportReason] = mapped_column(enum_column(ReportReason), nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ReportStatus] = mapped_column(
        enum_column(ReportStatus), nullable=False, default=ReportStatus.PENDING
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )

    reporter: Mapped[User] = relationship("User", lazy="joined")


class ModerationQueueItem(Base):
    """Aggregated moderation state for one entity, fed by its reports."""

    __tablename__ = "moderation_queue"
    __table_args__ = (
        # One row per entity; concurrent creators fall back to the update path.
        UniqueConstraint("entity_type", "entity_id", name="uq_moderation_queue_entity"),
        CheckConstraint("report_count >= 0", name="ck_moderation_queue_report_count"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entity_type: Mapped[EntityType] = mapped_column(enum_column(EntityType), nullable=False)
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    report_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[QueueStatus] = mapped_column(
        enum_column(QueueStatus), nullable=False, default=QueueStatus.PENDING, index=True
    )
    handled_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    handled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    handler: Mapped[User | None] = relationship("User", lazy="joined")

"""SQLAlchemy models for course reviews and their reactions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from campus_commons.db.session import Base
from campus_commons.db.time import utcnow
from campus_commons.models.enums import ContentStatus, ReactionKind, enum_column


class CourseReview(Base):
    """A student's review of a course."""

    __tablename__ = "course_reviews"
    __table_args__ = (
        CheckConstraint(
            "rating_overall IS NULL OR rating_overall BETWEEN 1 AND 10",
            name="ck_course_reviews_rating_overall",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    course_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("courses.id"), nullable=False, index=True
    )
    rating_overall: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[ContentStatus] = mapped_column(
        enum_column(ContentStatus), nullable=False, default=ContentStatus.NORMAL, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class ReviewStat(Base):
    """Like/dislike counters for a review."""

    __tablename__ = "review_stats"

    review_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("course_reviews.id"), primary_key=True
    )
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislike_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    net_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_reacted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class ReviewReaction(Base):
    """Per-user reaction on a review.

    Composite primary key prevents duplicate reactions from the same user.
    """

    __tablename__ = "review_reactions"

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), primary_key=True)
    review_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("course_reviews.id"), primary_key=True
    )
    reaction: Mapped[ReactionKind] = mapped_column(enum_column(ReactionKind), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

"""SQLAlchemy models for comments on resources and on reviews.

Both comment kinds share the same shape: content, owner, status and a
like/dislike counter row keyed by ``comment_id``.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_commons.db.session import Base
from campus_commons.db.time import utcnow
from campus_commons.models.enums import ContentStatus, ReactionKind, enum_column


class ResourceComment(Base):
    """A comment left under a resource."""

    __tablename__ = "resource_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resource_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("resources.id"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ContentStatus] = mapped_column(
        enum_column(ContentStatus), nullable=False, default=ContentStatus.NORMAL
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )


class ResourceCommentStat(Base):
    __tablename__ = "resource_comment_stats"

    comment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("resource_comments.id"), primary_key=True
    )
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislike_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    net_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_reacted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class ResourceCommentReaction(Base):
    __tablename__ = "resource_comment_reactions"

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), primary_key=True)
    comment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("resource_comments.id"), primary_key=True
    )
    reaction: Mapped[ReactionKind] = mapped_column(enum_column(ReactionKind), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class ReviewComment(Base):
    """A reply left under a course review."""

    __tablename__ = "review_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    review_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("course_reviews.id"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ContentStatus] = mapped_column(
        enum_column(ContentStatus), nullable=False, default=ContentStatus.NORMAL
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )


class ReviewCommentStat(Base):
    __tablename__ = "review_comment_stats"

    comment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("review_comments.id"), primary_key=True
    )
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislike_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    net_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_reacted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class ReviewCommentReaction(Base):
    __tablename__ = "review_comment_reactions"

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), primary_key=True)
    comment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("review_comments.id"), primary_key=True
    )
    reaction: Mapped[ReactionKind] = mapped_column(enum_column(ReactionKind), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

"""SQLAlchemy models for shared course resources and their counters."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_commons.db.session import Base
from campus_commons.db.time import utcnow
from campus_commons.models.enums import ContentStatus, enum_column


class Resource(Base):
    """Course material uploaded by a user (file, link or note)."""

    __tablename__ = "resources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    uploader_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    # file | link | note
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    url_or_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # public | course | private
    visibility: Mapped[str] = mapped_column(String(16), nullable=False, default="public")
    status: Mapped[ContentStatus] = mapped_column(
        enum_column(ContentStatus), nullable=False, default=ContentStatus.NORMAL, index=True
    )
    tags: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class ResourceStat(Base):
    """Denormalised counters for a resource, one row per resource."""

    __tablename__ = "resource_stats"

    resource_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("resources.id"), primary_key=True
    )
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    download_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    favorite_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_interacted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class ResourceLike(Base):
    """A user's like on a resource; the composite key makes it unique."""

    __tablename__ = "resource_likes"

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), primary_key=True)
    resource_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("resources.id"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class ResourceFavorite(Base):
    """A user's bookmark of a resource."""

    __tablename__ = "resource_favorites"

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), primary_key=True)
    resource_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("resources.id"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

"""Closed value sets shared by models, schemas and services."""

from __future__ import annotations

from enum import StrEnum

import sqlalchemy as sa


class EntityType(StrEnum):
    """The four reportable content kinds."""

    RESOURCE = "resource"
    REVIEW = "review"
    RESOURCE_COMMENT = "resource_comment"
    REVIEW_COMMENT = "review_comment"


class ContentStatus(StrEnum):
    """Visibility status of content records. ``HIDDEN`` applies to resources only."""

    NORMAL = "normal"
    BLOCKED = "blocked"
    DELETED = "deleted"
    HIDDEN = "hidden"


class ReportReason(StrEnum):
    PLAGIARISM = "plagiarism"
    ABUSE = "abuse"
    SPAM = "spam"
    OTHER = "other"


class ReportStatus(StrEnum):
    PENDING = "pending"
    HANDLED = "handled"


class QueueStatus(StrEnum):
    """Review status of a moderation queue item.

    ``PENDING`` and ``PENDING_REVIEW`` are active; the rest are resolutions.
    """

    PENDING = "pending"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    REMOVED = "removed"

    @property
    def is_active(self) -> bool:
        return self in (QueueStatus.PENDING, QueueStatus.PENDING_REVIEW)


class ModerationAction(StrEnum):
    HIDE = "hide"


class ReactionKind(StrEnum):
    LIKE = "like"
    DISLIKE = "dislike"


class NotificationType(StrEnum):
    SYSTEM = "system"
    RESOURCE = "resource"
    REVIEW = "review"
    COMMENT = "comment"
    ANNOUNCEMENT = "announcement"


class UserRole(StrEnum):
    USER = "user"
    ADMIN = "admin"


class UserStatus(StrEnum):
    ACTIVE = "active"
    BANNED = "banned"
    DELETED = "deleted"


def enum_column(enum_cls: type[StrEnum]) -> sa.Enum:
    """Return a portable VARCHAR-backed enum type storing member values."""
    return sa.Enum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )

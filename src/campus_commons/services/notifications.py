"""Best-effort in-app notification delivery.

Notifications are written after the primary change has been committed, in
their own SAVEPOINT. A failure here is logged and swallowed: the request
that triggered it has already succeeded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_commons.models import Notification
from campus_commons.models.enums import EntityType, NotificationType

logger = logging.getLogger(__name__)

_ENTITY_LABELS: dict[EntityType, str] = {
    EntityType.RESOURCE: "resource",
    EntityType.REVIEW: "review",
    EntityType.RESOURCE_COMMENT: "resource comment",
    EntityType.REVIEW_COMMENT: "review reply",
}


@dataclass(frozen=True)
class NotificationMessage:
    """A notification waiting to be delivered."""

    user_id: int
    type: NotificationType
    title: str
    content: str
    entity_type: EntityType | None = None
    entity_id: int | None = None


def entity_label(entity_type: EntityType) -> str:
    """Return the human-readable name of an entity kind."""
    return _ENTITY_LABELS[entity_type]


def report_submitted(reporter_id: int, entity_type: EntityType, entity_id: int) -> NotificationMessage:
    return NotificationMessage(
        user_id=reporter_id,
        type=NotificationType.SYSTEM,
        title="Report submitted",
        content=(
            f"Your report on this {entity_label(entity_type)} has been submitted. "
            "We will review it as soon as possible."
        ),
        entity_type=entity_type,
        entity_id=entity_id,
    )


def report_resolved(
    reporter_id: int,
    entity_type: EntityType,
    entity_id: int,
    *,
    removed: bool,
    hidden: bool,
) -> NotificationMessage:
    if removed:
        content = "The content you reported has been removed."
    elif hidden:
        content = "The content you reported has been hidden."
    else:
        content = "The content you reported has been reviewed."
    return NotificationMessage(
        user_id=reporter_id,
        type=NotificationType.SYSTEM,
        title="Your report has been handled",
        content=content,
        entity_type=entity_type,
        entity_id=entity_id,
    )


def content_taken_down(
    owner_id: int,
    entity_type: EntityType,
    entity_id: int,
    *,
    removed: bool,
) -> NotificationMessage:
    label = entity_label(entity_type)
    verb = "removed" if removed else "hidden"
    if entity_type is EntityType.RESOURCE:
        notification_type = NotificationType.RESOURCE
    elif entity_type is EntityType.REVIEW:
        notification_type = NotificationType.REVIEW
    else:
        notification_type = NotificationType.COMMENT
    return NotificationMessage(
        user_id=owner_id,
        type=notification_type,
        title=f"Your {label} was {verb}",
        content=f"Your {label} was {verb} after being reported for violating the guidelines.",
        entity_type=entity_type,
        entity_id=entity_id,
    )


class NotificationDispatcher:
    """Single entry point for notification side effects."""

    def notify(self, db: Session, message: NotificationMessage) -> int:
        """Deliver one notification; returns the number written (0 or 1)."""
        return self.notify_many(db, [message])

    def notify_many(self, db: Session, messages: Iterable[NotificationMessage]) -> int:
        """Deliver a batch of notifications.

        Returns:
            Number of notifications written; 0 if delivery failed.
        """
        rows = [
            Notification(
                user_id=message.user_id,
                type=message.type,
                title=message.title,
                content=message.content,
                entity_type=message.entity_type.value if message.entity_type else None,
                entity_id=message.entity_id,
            )
            for message in messages
        ]
        if not rows:
            return 0

        try:
            with db.begin_nested():
                db.add_all(rows)
            db.commit()
        except SQLAlchemyError:
            logger.warning(
                "Dropping %d notification(s) after delivery failure",
                len(rows),
                exc_info=True,
            )
            db.rollback()
            return 0
        return len(rows)


notification_dispatcher = NotificationDispatcher()


def get_notification_dispatcher() -> NotificationDispatcher:
    """Return the shared notification dispatcher."""
    return notification_dispatcher

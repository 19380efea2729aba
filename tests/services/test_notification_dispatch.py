"""Tests for notification messages and best-effort delivery."""

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from campus_commons.models import Notification
from campus_commons.models.enums import EntityType, NotificationType
from campus_commons.services.notifications import (
    NotificationDispatcher,
    content_taken_down,
    report_resolved,
    report_submitted,
)


def test_message_wording() -> None:
    submitted = report_submitted(7, EntityType.REVIEW_COMMENT, 3)
    assert "review reply" in submitted.content
    assert submitted.type is NotificationType.SYSTEM

    resolved = report_resolved(7, EntityType.RESOURCE, 42, removed=False, hidden=True)
    assert resolved.content == "The content you reported has been hidden."

    taken_down = content_taken_down(5, EntityType.RESOURCE_COMMENT, 8, removed=True)
    assert taken_down.type is NotificationType.COMMENT
    assert taken_down.title == "Your resource comment was removed"


def test_notify_many_writes_rows(db_session, test_user, other_user) -> None:
    dispatcher = NotificationDispatcher()
    messages = [
        report_submitted(test_user.id, EntityType.RESOURCE, 1),
        report_submitted(other_user.id, EntityType.RESOURCE, 1),
    ]

    assert dispatcher.notify_many(db_session, messages) == 2
    assert db_session.query(Notification).count() == 2


def test_notify_many_with_nothing_to_send_skips_session() -> None:
    db = MagicMock()

    assert NotificationDispatcher().notify_many(db, []) == 0
    db.commit.assert_not_called()


def test_delivery_failure_is_swallowed(caplog) -> None:
    db = MagicMock()
    db.commit.side_effect = OperationalError("INSERT", {}, Exception("database is locked"))

    sent = NotificationDispatcher().notify(db, report_submitted(1, EntityType.REVIEW, 2))

    assert sent == 0
    db.rollback.assert_called_once()
    assert "Dropping 1 notification(s)" in caplog.text

"""Tests for the moderation queue state machine."""

import pytest

from campus_commons.core.errors import InvalidStateError
from campus_commons.models import ModerationQueueItem
from campus_commons.models.enums import EntityType, QueueStatus
from campus_commons.services.moderation_queue import (
    ModerationQueue,
    QueueFilters,
    next_status_on_escalation,
)
from campus_commons.services.pagination import PageRequest
from campus_commons.services.upsert import adjust_counter


@pytest.mark.parametrize(
    ("current", "expected"),
    [
        (QueueStatus.PENDING, QueueStatus.PENDING),
        (QueueStatus.PENDING_REVIEW, QueueStatus.PENDING_REVIEW),
        (QueueStatus.APPROVED, QueueStatus.PENDING_REVIEW),
        (QueueStatus.REJECTED, QueueStatus.PENDING_REVIEW),
    ],
)
def test_next_status_on_new_report(current, expected) -> None:
    assert next_status_on_escalation(current, 1) is expected


def test_report_on_removed_item_is_rejected() -> None:
    with pytest.raises(InvalidStateError, match="removed"):
        next_status_on_escalation(QueueStatus.REMOVED, 1)


def test_manual_touch_leaves_removed_item_alone() -> None:
    assert next_status_on_escalation(QueueStatus.REMOVED, 0) is QueueStatus.REMOVED


def test_escalate_twice_creates_single_row(db_session, resource) -> None:
    first = ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)
    second = ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)

    assert first.id == second.id
    assert second.report_count == 2
    assert second.status == QueueStatus.PENDING
    rows = (
        db_session.query(ModerationQueueItem)
        .filter_by(entity_type=EntityType.RESOURCE, entity_id=resource.id)
        .count()
    )
    assert rows == 1


@pytest.mark.parametrize("resolved", [QueueStatus.APPROVED, QueueStatus.REJECTED])
def test_new_report_reopens_resolved_item(db_session, resource, admin_user, resolved) -> None:
    item = ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)
    ModerationQueue.apply_decision(db_session, item, resolved, admin_user.id)

    item = ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)

    assert item.status == QueueStatus.PENDING_REVIEW
    assert item.report_count == 2


def test_escalate_removed_item_with_report_raises(db_session, resource, admin_user) -> None:
    item = ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)
    ModerationQueue.apply_decision(db_session, item, QueueStatus.REMOVED, admin_user.id)

    with pytest.raises(InvalidStateError):
        ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)

    db_session.refresh(item)
    assert item.report_count == 1
    assert item.status == QueueStatus.REMOVED


def test_manual_escalation_keeps_removed_and_count(db_session, resource, admin_user) -> None:
    item = ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)
    ModerationQueue.apply_decision(db_session, item, QueueStatus.REMOVED, admin_user.id)

    item = ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 0)

    assert item.status == QueueStatus.REMOVED
    assert item.report_count == 1


def test_manual_creation_starts_at_zero(db_session, review) -> None:
    item = ModerationQueue.escalate(db_session, EntityType.REVIEW, review.id, 0)

    assert item.report_count == 0
    assert item.status == QueueStatus.PENDING


def test_apply_decision_stamps_handler(db_session, resource, admin_user) -> None:
    item = ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)

    ModerationQueue.apply_decision(db_session, item, QueueStatus.REJECTED, admin_user.id, "spam bot")

    assert item.status == QueueStatus.REJECTED
    assert item.handled_by == admin_user.id
    assert item.handled_at is not None
    assert item.notes == "spam bot"


def test_report_count_never_negative(db_session, resource) -> None:
    item = ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)

    for _ in range(3):
        adjust_counter(
            db_session,
            ModerationQueueItem.id,
            item.id,
            ModerationQueueItem.report_count,
            -1,
        )
    db_session.refresh(item)

    assert item.report_count == 0


def test_search_sorts_by_report_count(db_session, resource, review, resource_comment) -> None:
    ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)
    ModerationQueue.escalate(db_session, EntityType.REVIEW, review.id, 3)
    ModerationQueue.escalate(db_session, EntityType.RESOURCE_COMMENT, resource_comment.id, 2)

    items, pagination = ModerationQueue.search(db_session, QueueFilters(), PageRequest(1, 20))
    assert [item.report_count for item in items] == [3, 2, 1]
    assert pagination.total == 3

    items, _ = ModerationQueue.search(
        db_session, QueueFilters(sort_order="asc"), PageRequest(1, 20)
    )
    assert [item.report_count for item in items] == [1, 2, 3]

    items, _ = ModerationQueue.search(
        db_session, QueueFilters(entity_type=EntityType.REVIEW), PageRequest(1, 20)
    )
    assert [item.entity_id for item in items] == [review.id]


def test_search_unknown_sort_field_falls_back(db_session, resource, review) -> None:
    ModerationQueue.escalate(db_session, EntityType.RESOURCE, resource.id, 1)
    ModerationQueue.escalate(db_session, EntityType.REVIEW, review.id, 4)

    items, _ = ModerationQueue.search(
        db_session, QueueFilters(sort_by="entity_id; drop table"), PageRequest(1, 20)
    )

    assert [item.report_count for item in items] == [4, 1]

"""Tests for the find-or-create and counter helpers."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from campus_commons.models import ModerationQueueItem, ResourceStat
from campus_commons.models.enums import EntityType, QueueStatus
from campus_commons.services.upsert import UpsertRetryExhausted, adjust_counter, find_or_create


def test_find_or_create_inserts_then_finds(db_session, resource) -> None:
    stat, created = find_or_create(
        db_session, ResourceStat, defaults={"view_count": 5}, resource_id=resource.id
    )
    assert created is True
    assert stat.view_count == 5

    again, created = find_or_create(
        db_session, ResourceStat, defaults={"view_count": 99}, resource_id=resource.id
    )
    assert created is False
    assert again is stat
    assert again.view_count == 5


def _racing_session(lookups: list) -> MagicMock:
    db = MagicMock()
    db.query.return_value.filter_by.return_value.first.side_effect = lookups
    db.begin_nested.return_value.__exit__.return_value = False
    db.add.side_effect = IntegrityError("INSERT", {}, Exception("unique violation"))
    return db


def test_lost_insert_race_falls_back_to_existing_row() -> None:
    winner = ModerationQueueItem(
        entity_type=EntityType.RESOURCE, entity_id=1, report_count=1, status=QueueStatus.PENDING
    )
    db = _racing_session([None, winner])

    item, created = find_or_create(
        db, ModerationQueueItem, defaults={"report_count": 1}, entity_type=EntityType.RESOURCE, entity_id=1
    )

    assert created is False
    assert item is winner
    assert db.add.call_count == 1


def test_retry_exhaustion_raises() -> None:
    db = _racing_session([None] * 10)

    with pytest.raises(UpsertRetryExhausted):
        find_or_create(db, ModerationQueueItem, entity_type=EntityType.REVIEW, entity_id=2)


def test_adjust_counter_touches_timestamp(db_session, resource) -> None:
    stat, _ = find_or_create(db_session, ResourceStat, resource_id=resource.id)
    assert stat.last_interacted_at is None

    adjust_counter(
        db_session,
        ResourceStat.resource_id,
        resource.id,
        ResourceStat.download_count,
        2,
        touch=ResourceStat.last_interacted_at,
    )
    db_session.refresh(stat)

    assert stat.download_count == 2
    assert stat.last_interacted_at is not None

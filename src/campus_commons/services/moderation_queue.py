"""Moderation queue state machine.

A queue item aggregates every report against one entity. New reports
*escalate* it (bump ``report_count``, re-open resolved items); admins
*resolve* it with a decision.

Escalation table::

    (no item)          -> create, status=pending, report_count=delta
    pending            -> pending
    pending_review     -> pending_review
    approved/rejected  -> pending_review
    removed            -> error when delta > 0, unchanged when delta == 0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from campus_commons.core.errors import InvalidStateError
from campus_commons.db.time import utcnow
from campus_commons.models import ModerationQueueItem
from campus_commons.models.enums import EntityType, QueueStatus
from campus_commons.schemas.common import Pagination
from campus_commons.services.pagination import PageRequest, paginate
from campus_commons.services.upsert import adjust_counter, find_or_create

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "report_count": ModerationQueueItem.report_count,
    "created_at": ModerationQueueItem.created_at,
    "updated_at": ModerationQueueItem.updated_at,
}


def next_status_on_escalation(current: QueueStatus, delta: int) -> QueueStatus:
    """Return the status an existing item moves to when ``delta`` reports arrive.

    Raises:
        InvalidStateError: If a real report (``delta > 0``) targets removed content.
    """
    if current is QueueStatus.REMOVED:
        if delta > 0:
            raise InvalidStateError("Cannot report removed content")
        return QueueStatus.REMOVED
    if current in (QueueStatus.APPROVED, QueueStatus.REJECTED):
        return QueueStatus.PENDING_REVIEW
    return current


@dataclass(frozen=True)
class QueueFilters:
    status: QueueStatus | None = None
    entity_type: EntityType | None = None
    sort_by: str = "report_count"
    sort_order: str = "desc"


class ModerationQueue:
    """Data access and transitions for :class:`ModerationQueueItem` rows."""

    @staticmethod
    def get(db: Session, item_id: int) -> ModerationQueueItem | None:
        return db.get(ModerationQueueItem, item_id)

    @staticmethod
    def for_entity(db: Session, entity_type: EntityType, entity_id: int) -> ModerationQueueItem | None:
        return (
            db.query(ModerationQueueItem)
            .filter(
                ModerationQueueItem.entity_type == entity_type,
                ModerationQueueItem.entity_id == entity_id,
            )
            .first()
        )

    @staticmethod
    def escalate(
        db: Session, entity_type: EntityType, entity_id: int, delta: int = 1
    ) -> ModerationQueueItem:
        """Find or create the entity's queue item and apply ``delta`` new reports."""
        item, created = find_or_create(
            db,
            ModerationQueueItem,
            defaults={"report_count": delta, "status": QueueStatus.PENDING},
            entity_type=entity_type,
            entity_id=entity_id,
        )
        if created:
            logger.info(
                "Opened moderation queue item %s for %s #%s (report_count=%d)",
                item.id,
                entity_type,
                entity_id,
                delta,
            )
            return item

        current = QueueStatus(item.status)
        new_status = next_status_on_escalation(current, delta)
        if delta:
            adjust_counter(
                db,
                ModerationQueueItem.id,
                item.id,
                ModerationQueueItem.report_count,
                delta,
                touch=ModerationQueueItem.updated_at,
            )
        if new_status is not current:
            item.status = new_status
            db.flush()
        db.refresh(item)
        logger.info(
            "Escalated moderation queue item %s: %s -> %s (report_count=%d)",
            item.id,
            current,
            new_status,
            item.report_count,
        )
        return item

    @staticmethod
    def apply_decision(
        db: Session,
        item: ModerationQueueItem,
        decision: QueueStatus,
        admin_id: int,
        notes: str | None = None,
    ) -> None:
        """Stamp an admin decision onto ``item``. Cascades are the caller's concern."""
        previous = item.status
        item.status = decision
        item.handled_by = admin_id
        item.handled_at = utcnow()
        if notes is not None:
            item.notes = notes
        db.flush()
        logger.info(
            "Moderation queue item %s handled by admin %s: %s -> %s",
            item.id,
            admin_id,
            previous,
            decision,
        )

    @staticmethod
    def force_status(db: Session, item: ModerationQueueItem, status: QueueStatus) -> None:
        item.status = status
        db.flush()

    @staticmethod
    def search(
        db: Session, filters: QueueFilters, page: PageRequest
    ) -> tuple[list[ModerationQueueItem], Pagination]:
        query = db.query(ModerationQueueItem)
        if filters.status is not None:
            query = query.filter(ModerationQueueItem.status == filters.status)
        if filters.entity_type is not None:
            query = query.filter(ModerationQueueItem.entity_type == filters.entity_type)

        column = _SORT_COLUMNS.get(filters.sort_by, ModerationQueueItem.report_count)
        ordering = column.asc() if filters.sort_order.lower() == "asc" else column.desc()
        query = query.order_by(ordering, ModerationQueueItem.id.desc())
        return paginate(query, page)

    @staticmethod
    def delete(db: Session, item: ModerationQueueItem) -> None:
        db.delete(item)
        db.flush()

    @staticmethod
    def count_by_status(db: Session) -> dict[QueueStatus, int]:
        rows = (
            db.query(ModerationQueueItem.status, func.count(ModerationQueueItem.id))
            .group_by(ModerationQueueItem.status)
            .all()
        )
        return {QueueStatus(status): int(count) for status, count in rows}

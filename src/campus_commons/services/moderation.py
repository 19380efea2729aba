# src/campus_commons/services/moderation.py
"""Moderation workflow tying reports, the queue and content visibility together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_commons.core.errors import ConflictError, InvalidStateError, NotFoundError
from campus_commons.models import ModerationQueueItem, Report
from campus_commons.models.enums import (
    ContentStatus,
    EntityType,
    ModerationAction,
    QueueStatus,
    ReportReason,
    ReportStatus,
)
from campus_commons.schemas.moderation import (
    EntityDetail,
    ModerationStats,
    QueueStatusCounts,
    ReportStatusCounts,
)
from campus_commons.services.entities import EntityAdapter, get_adapter
from campus_commons.services.moderation_queue import ModerationQueue
from campus_commons.services.notifications import (
    NotificationDispatcher,
    NotificationMessage,
    content_taken_down,
    get_notification_dispatcher,
    report_resolved,
    report_submitted,
)
from campus_commons.services.report_ledger import ReportLedger

logger = logging.getLogger(__name__)


class VisibilityChange(Enum):
    """What a decision did to the underlying content."""

    NONE = "none"
    REMOVED = "removed"
    HIDDEN = "hidden"
    RESTORED = "restored"


@dataclass(frozen=True)
class HandleOutcome:
    item: ModerationQueueItem
    visibility: VisibilityChange
    notified_reporters: list[int]
    notified_owner: int | None


@dataclass(frozen=True)
class QueueItemDetail:
    item: ModerationQueueItem
    reports: list[Report]
    entity: EntityDetail | None


def apply_visibility(
    db: Session,
    adapter: EntityAdapter,
    entity: Any,
    decision: QueueStatus,
    action: ModerationAction | None,
) -> VisibilityChange:
    """Cascade a queue decision onto the entity's status.

    ``removed`` deletes any kind of content. ``approved`` only matters for
    resources: with ``action=hide`` the resource is hidden, otherwise a
    previous hide is lifted. Every other decision leaves content untouched.
    """
    if decision is QueueStatus.REMOVED:
        adapter.update_status(db, entity.id, ContentStatus.DELETED)
        return VisibilityChange.REMOVED

    if decision is QueueStatus.APPROVED and adapter.entity_type is EntityType.RESOURCE:
        if action is ModerationAction.HIDE:
            adapter.update_status(db, entity.id, ContentStatus.HIDDEN)
            return VisibilityChange.HIDDEN
        if entity.status == ContentStatus.HIDDEN:
            adapter.update_status(db, entity.id, ContentStatus.NORMAL)
            return VisibilityChange.RESTORED

    return VisibilityChange.NONE


class ModerationService:
    """Orchestrates report intake, admin decisions and their side effects.

    The queue and the ledger are only ever mutated through this service.
    """

    def __init__(self, dispatcher: NotificationDispatcher | None = None) -> None:
        self.dispatcher = dispatcher or get_notification_dispatcher()
        self.queue = ModerationQueue()
        self.ledger = ReportLedger()

    # ---- reports -------------------------------------------------------

    def create_report(
        self,
        db: Session,
        *,
        reporter_id: int,
        entity_type: EntityType,
        entity_id: int,
        reason: ReportReason,
        details: str | None = None,
    ) -> Report:
        """File a report and escalate the entity's queue item.

        Raises:
            NotFoundError: The entity does not exist.
            InvalidStateError: The entity is deleted or its queue item is removed.
            ConflictError: The reporter already has a pending report on an
                entity that is still queued.
        """
        adapter = get_adapter(entity_type)
        entity = adapter.find(db, entity_id)
        if entity is None:
            raise NotFoundError(f"{entity_type} not found")
        if entity.status == ContentStatus.DELETED:
            raise InvalidStateError("Cannot report deleted content")

        item = self.queue.for_entity(db, entity_type, entity_id)
        if item is not None and item.status == QueueStatus.REMOVED:
            raise InvalidStateError("Cannot report removed content")

        existing = self.ledger.find_pending(db, reporter_id, entity_type, entity_id)
        if existing is not None:
            if item is not None:
                raise ConflictError(
                    "You have already reported this item and it is pending review"
                )
            # The queue item was cleaned up while this report stayed pending.
            logger.info(
                "Closing orphaned pending report %s on %s #%s", existing.id, entity_type, entity_id
            )
            existing.status = ReportStatus.HANDLED
            db.flush()

        try:
            report = self.ledger.add(
                db,
                reporter_id=reporter_id,
                entity_type=entity_type,
                entity_id=entity_id,
                reason=reason,
                details=details,
            )
            self.queue.escalate(db, entity_type, entity_id, 1)
            db.commit()
        except IntegrityError as exc:
            # A concurrent submission by the same reporter won the pending slot.
            db.rollback()
            raise ConflictError(
                "You have already reported this item and it is pending review"
            ) from exc
        except Exception:
            db.rollback()
            raise
        db.refresh(report)
        logger.info(
            "User %s reported %s #%s (%s) as report %s",
            reporter_id,
            entity_type,
            entity_id,
            reason,
            report.id,
        )

        self.dispatcher.notify(db, report_submitted(reporter_id, entity_type, entity_id))
        return report

    def set_report_status(self, db: Session, report_id: int, status: ReportStatus) -> Report:
        """Overwrite a report's status without touching the queue."""
        report = self.ledger.get(db, report_id)
        if report is None:
            raise NotFoundError("Report not found")
        report.status = status
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError(
                "This user already has a pending report on the same content"
            ) from exc
        db.refresh(report)
        return report

    def delete_report(self, db: Session, report_id: int) -> None:
        report = self.ledger.get(db, report_id)
        if report is None:
            raise NotFoundError("Report not found")
        if report.status != ReportStatus.HANDLED:
            raise InvalidStateError(
                "Cannot delete pending reports. Only handled reports can be deleted."
            )
        db.delete(report)
        db.commit()

    # ---- queue ---------------------------------------------------------

    def create_manual_item(
        self,
        db: Session,
        *,
        entity_type: EntityType,
        entity_id: int,
        notes: str | None = None,
    ) -> ModerationQueueItem:
        """Open (or touch) a queue item without a report behind it."""
        adapter = get_adapter(entity_type)
        if adapter.find(db, entity_id) is None:
            raise NotFoundError(f"{entity_type} not found")

        try:
            item = self.queue.escalate(db, entity_type, entity_id, 0)
            if notes:
                item.notes = notes
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(item)
        return item

    def handle_item(
        self,
        db: Session,
        item_id: int,
        *,
        decision: QueueStatus,
        admin_id: int,
        action: ModerationAction | None = None,
        notes: str | None = None,
    ) -> HandleOutcome:
        """Apply an admin decision and cascade it.

        Resolutions (approved, rejected, removed) close every pending report
        on the entity and notify the reporters; the owner is notified only
        when the content was hidden or removed.
        """
        item = self.queue.get(db, item_id)
        if item is None:
            raise NotFoundError("Moderation queue item not found")

        entity_type = EntityType(item.entity_type)
        entity_id = item.entity_id
        adapter = get_adapter(entity_type)

        try:
            self.queue.apply_decision(db, item, decision, admin_id, notes)

            entity = adapter.find(db, entity_id)
            visibility = VisibilityChange.NONE
            owner_id: int | None = None
            if entity is not None:
                owner_id = adapter.owner_id(entity)
                visibility = apply_visibility(db, adapter, entity, decision, action)
            else:
                logger.warning(
                    "Queue item %s refers to missing %s #%s", item.id, entity_type, entity_id
                )

            reporter_ids: list[int] = []
            if not decision.is_active:
                reporter_ids = self.ledger.resolve_pending(db, entity_type, entity_id)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(item)

        removed = visibility is VisibilityChange.REMOVED
        hidden = visibility is VisibilityChange.HIDDEN
        messages: list[NotificationMessage] = [
            report_resolved(
                reporter_id,
                entity_type,
                entity_id,
                removed=decision is QueueStatus.REMOVED,
                hidden=hidden,
            )
            for reporter_id in reporter_ids
        ]
        notified_owner = None
        if not decision.is_active and (removed or hidden) and owner_id is not None:
            messages.append(content_taken_down(owner_id, entity_type, entity_id, removed=removed))
            notified_owner = owner_id
        self.dispatcher.notify_many(db, messages)

        return HandleOutcome(
            item=item,
            visibility=visibility,
            notified_reporters=reporter_ids,
            notified_owner=notified_owner,
        )

    def delete_item(self, db: Session, item_id: int) -> None:
        """Close the entity's pending reports, then drop its queue item."""
        item = self.queue.get(db, item_id)
        if item is None:
            raise NotFoundError("Moderation queue item not found")
        try:
            closed = self.ledger.resolve_pending(db, EntityType(item.entity_type), item.entity_id)
            self.queue.delete(db, item)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(
            "Deleted moderation queue item %s (%s #%s); closed reports from %d reporter(s)",
            item_id,
            item.entity_type,
            item.entity_id,
            len(closed),
        )

    def request_re_review(
        self, db: Session, entity_type: EntityType, entity_id: int
    ) -> ModerationQueueItem:
        """Put an entity back in front of admins, e.g. after its owner edited it.

        The caller commits. Removed items are left as they are.
        """
        item = self.queue.escalate(db, entity_type, entity_id, 0)
        if item.status != QueueStatus.REMOVED:
            self.queue.force_status(db, item, QueueStatus.PENDING_REVIEW)
        return item

    def get_detail(self, db: Session, item_id: int) -> QueueItemDetail:
        item = self.queue.get(db, item_id)
        if item is None:
            raise NotFoundError("Moderation queue item not found")
        entity_type = EntityType(item.entity_type)
        adapter = get_adapter(entity_type)
        entity = adapter.find(db, item.entity_id)
        return QueueItemDetail(
            item=item,
            reports=self.ledger.for_entity(db, entity_type, item.entity_id),
            entity=adapter.project(db, entity) if entity is not None else None,
        )

    def stats(self, db: Session) -> ModerationStats:
        queue_counts = self.queue.count_by_status(db)
        report_counts = self.ledger.count_by_status(db)
        pending = report_counts.get(ReportStatus.PENDING, 0)
        handled = report_counts.get(ReportStatus.HANDLED, 0)
        return ModerationStats(
            queue=QueueStatusCounts(
                **{status.value: queue_counts.get(status, 0) for status in QueueStatus}
            ),
            reports=ReportStatusCounts(pending=pending, handled=handled, total=pending + handled),
        )


moderation_service = ModerationService()


def get_moderation_service() -> ModerationService:
    """Return the shared moderation service."""
    return moderation_service

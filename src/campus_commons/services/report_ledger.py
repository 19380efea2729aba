"""Persistence operations on user reports.

The ledger is append-mostly: rows are inserted as ``pending`` and only ever
move to ``handled``, either one at a time or in bulk per entity.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from campus_commons.models import Report
from campus_commons.models.enums import EntityType, ReportReason, ReportStatus
from campus_commons.schemas.common import Pagination
from campus_commons.services.pagination import PageRequest, paginate


@dataclass(frozen=True)
class ReportFilters:
    status: ReportStatus | None = None
    entity_type: EntityType | None = None
    reason: ReportReason | None = None
    reporter_id: int | None = None


class ReportLedger:
    """Data access for :class:`Report` rows."""

    @staticmethod
    def get(db: Session, report_id: int) -> Report | None:
        return db.get(Report, report_id)

    @staticmethod
    def find_pending(
        db: Session, reporter_id: int, entity_type: EntityType, entity_id: int
    ) -> Report | None:
        """Return the reporter's pending report on an entity, if any."""
        return (
            db.query(Report)
            .filter(
                Report.reporter_id == reporter_id,
                Report.entity_type == entity_type,
                Report.entity_id == entity_id,
                Report.status == ReportStatus.PENDING,
            )
            .first()
        )

    @staticmethod
    def add(
        db: Session,
        *,
        reporter_id: int,
        entity_type: EntityType,
        entity_id: int,
        reason: ReportReason,
        details: str | None,
    ) -> Report:
        report = Report(
            reporter_id=reporter_id,
            entity_type=entity_type,
            entity_id=entity_id,
            reason=reason,
            details=details or None,
            status=ReportStatus.PENDING,
        )
        db.add(report)
        db.flush()
        return report

    @staticmethod
    def search(db: Session, filters: ReportFilters, page: PageRequest) -> tuple[list[Report], Pagination]:
        query = db.query(Report)
        if filters.status is not None:
            query = query.filter(Report.status == filters.status)
        if filters.entity_type is not None:
            query = query.filter(Report.entity_type == filters.entity_type)
        if filters.reason is not None:
            query = query.filter(Report.reason == filters.reason)
        if filters.reporter_id is not None:
            query = query.filter(Report.reporter_id == filters.reporter_id)
        query = query.order_by(Report.created_at.desc(), Report.id.desc())
        return paginate(query, page)

    @staticmethod
    def for_entity(db: Session, entity_type: EntityType, entity_id: int) -> list[Report]:
        """Return the full report history of an entity, newest first."""
        return (
            db.query(Report)
            .filter(Report.entity_type == entity_type, Report.entity_id == entity_id)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .all()
        )

    @staticmethod
    def resolve_pending(db: Session, entity_type: EntityType, entity_id: int) -> list[int]:
        """Mark every pending report on an entity as handled.

        Returns:
            Distinct reporter ids of the reports that were pending, in the
            order they first reported.
        """
        rows = (
            db.query(Report.reporter_id)
            .filter(
                Report.entity_type == entity_type,
                Report.entity_id == entity_id,
                Report.status == ReportStatus.PENDING,
            )
            .order_by(Report.created_at, Report.id)
            .all()
        )
        db.execute(
            update(Report)
            .where(
                Report.entity_type == entity_type,
                Report.entity_id == entity_id,
                Report.status == ReportStatus.PENDING,
            )
            .values(status=ReportStatus.HANDLED)
            .execution_options(synchronize_session="fetch")
        )
        return list(dict.fromkeys(reporter_id for (reporter_id,) in rows))

    @staticmethod
    def count_by_status(db: Session) -> dict[ReportStatus, int]:
        rows = db.query(Report.status, func.count(Report.id)).group_by(Report.status).all()
        return {ReportStatus(status): int(count) for status, count in rows}

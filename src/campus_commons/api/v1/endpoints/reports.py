"""Report endpoints: filing reports and admin report management."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, status

from campus_commons.api.v1.dependencies import (
    AdminUserDep,
    CurrentUserDep,
    ModerationServiceDep,
    SessionDep,
)
from campus_commons.core.errors import NotFoundError
from campus_commons.models.enums import EntityType, ReportReason, ReportStatus
from campus_commons.schemas.common import ApiResponse
from campus_commons.schemas.moderation import (
    ReportCreate,
    ReportData,
    ReportListData,
    ReportResponse,
    ReportStatusUpdate,
)
from campus_commons.services.pagination import PageRequest
from campus_commons.services.report_ledger import ReportFilters, ReportLedger

router = APIRouter(prefix="/reports", tags=["reports"])


def _report_list(reports: list[Any], pagination: Any) -> ReportListData:
    return ReportListData(
        reports=[ReportResponse.model_validate(report) for report in reports],
        pagination=pagination,
    )


@router.post(
    "",
    response_model=ApiResponse[ReportData],
    status_code=status.HTTP_201_CREATED,
)
async def create_report(
    payload: ReportCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    moderation: ModerationServiceDep,
) -> ApiResponse[ReportData]:
    """Report a resource, review or comment for moderation."""
    report = moderation.create_report(
        db,
        reporter_id=current_user.id,
        entity_type=payload.entity_type,
        entity_id=payload.entity_id,
        reason=payload.reason,
        details=payload.details,
    )
    return ApiResponse(
        message="Report created successfully",
        data=ReportData(report=ReportResponse.model_validate(report)),
    )


@router.get("", response_model=ApiResponse[ReportListData])
async def list_reports(
    _admin: AdminUserDep,
    db: SessionDep,
    status_filter: ReportStatus | None = Query(None, alias="status"),
    entity_type: EntityType | None = Query(None),
    reason: ReportReason | None = Query(None),
    reporter_id: int | None = Query(None, ge=1),
    page: int = Query(1),
    limit: int = Query(20),
) -> ApiResponse[ReportListData]:
    """List reports with optional filters (admin only)."""
    filters = ReportFilters(
        status=status_filter,
        entity_type=entity_type,
        reason=reason,
        reporter_id=reporter_id,
    )
    reports, pagination = ReportLedger.search(db, filters, PageRequest.from_params(page, limit))
    return ApiResponse(
        message="Reports retrieved successfully",
        data=_report_list(reports, pagination),
    )


@router.get("/my", response_model=ApiResponse[ReportListData])
async def my_reports(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: int = Query(1),
    limit: int = Query(20),
) -> ApiResponse[ReportListData]:
    """List the reports filed by the current user."""
    reports, pagination = ReportLedger.search(
        db,
        ReportFilters(reporter_id=current_user.id),
        PageRequest.from_params(page, limit),
    )
    return ApiResponse(
        message="My reports retrieved successfully",
        data=_report_list(reports, pagination),
    )


@router.get("/{report_id}", response_model=ApiResponse[ReportData])
async def get_report(
    report_id: int,
    _admin: AdminUserDep,
    db: SessionDep,
) -> ApiResponse[ReportData]:
    report = ReportLedger.get(db, report_id)
    if report is None:
        raise NotFoundError("Report not found")
    return ApiResponse(
        message="Report retrieved successfully",
        data=ReportData(report=ReportResponse.model_validate(report)),
    )


@router.put("/{report_id}/status", response_model=ApiResponse[ReportData])
async def update_report_status(
    report_id: int,
    payload: ReportStatusUpdate,
    _admin: AdminUserDep,
    db: SessionDep,
    moderation: ModerationServiceDep,
) -> ApiResponse[ReportData]:
    """Overwrite a report's status. The moderation queue is not touched."""
    report = moderation.set_report_status(db, report_id, payload.status)
    return ApiResponse(
        message="Report status updated successfully",
        data=ReportData(report=ReportResponse.model_validate(report)),
    )


@router.delete("/{report_id}", response_model=ApiResponse[None])
async def delete_report(
    report_id: int,
    _admin: AdminUserDep,
    db: SessionDep,
    moderation: ModerationServiceDep,
) -> ApiResponse[None]:
    """Delete a handled report. Pending reports cannot be deleted."""
    moderation.delete_report(db, report_id)
    return ApiResponse(message="Report deleted successfully")

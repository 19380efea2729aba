"""Resource editing, deletion and interaction counters."""

from __future__ import annotations

from fastapi import APIRouter

from campus_commons.api.v1.dependencies import CurrentUserDep, SessionDep
from campus_commons.schemas.common import ApiResponse
from campus_commons.schemas.reaction import ResourceStats, ResourceStatsData, ResourceToggleData
from campus_commons.schemas.resource import ResourceData, ResourceResponse, ResourceUpdate
from campus_commons.services import resources
from campus_commons.services.resources import ToggleOutcome

router = APIRouter(prefix="/resources", tags=["resources"])


def _toggle_data(outcome: ToggleOutcome) -> ResourceToggleData:
    return ResourceToggleData(
        active=outcome.active,
        stats=ResourceStats.model_validate(outcome.stats),
    )


@router.put("/{resource_id}", response_model=ApiResponse[ResourceData])
async def update_resource(
    resource_id: int,
    payload: ResourceUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ApiResponse[ResourceData]:
    """Edit a resource (owner or admin).

    Hidden resources stay hidden after an edit and are sent back for review.
    """
    resource = resources.update_resource(db, resource_id, payload, current_user)
    return ApiResponse(
        message="Resource updated successfully",
        data=ResourceData(resource=ResourceResponse.model_validate(resource)),
    )


@router.delete("/{resource_id}", response_model=ApiResponse[None])
async def delete_resource(
    resource_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ApiResponse[None]:
    resources.delete_resource(db, resource_id, current_user)
    return ApiResponse(message="Resource deleted successfully")


@router.post("/{resource_id}/like", response_model=ApiResponse[ResourceToggleData])
async def like_resource(
    resource_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ApiResponse[ResourceToggleData]:
    """Toggle the current user's like."""
    outcome = resources.toggle_like(db, resource_id, current_user.id)
    return ApiResponse(
        message="Resource liked" if outcome.active else "Like removed",
        data=_toggle_data(outcome),
    )


@router.post("/{resource_id}/favorite", response_model=ApiResponse[ResourceToggleData])
async def favorite_resource(
    resource_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ApiResponse[ResourceToggleData]:
    outcome = resources.add_favorite(db, resource_id, current_user.id)
    return ApiResponse(message="Resource added to favorites", data=_toggle_data(outcome))


@router.delete("/{resource_id}/favorite", response_model=ApiResponse[ResourceToggleData])
async def unfavorite_resource(
    resource_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ApiResponse[ResourceToggleData]:
    outcome = resources.remove_favorite(db, resource_id, current_user.id)
    return ApiResponse(message="Resource removed from favorites", data=_toggle_data(outcome))


@router.post("/{resource_id}/view", response_model=ApiResponse[ResourceStatsData])
async def record_view(resource_id: int, db: SessionDep) -> ApiResponse[ResourceStatsData]:
    stat = resources.record_view(db, resource_id)
    return ApiResponse(
        message="View recorded",
        data=ResourceStatsData(stats=ResourceStats.model_validate(stat)),
    )


@router.post("/{resource_id}/download", response_model=ApiResponse[ResourceStatsData])
async def record_download(resource_id: int, db: SessionDep) -> ApiResponse[ResourceStatsData]:
    stat = resources.record_download(db, resource_id)
    return ApiResponse(
        message="Download recorded",
        data=ResourceStatsData(stats=ResourceStats.model_validate(stat)),
    )


@router.get("/{resource_id}/stats", response_model=ApiResponse[ResourceStatsData])
async def resource_stats(resource_id: int, db: SessionDep) -> ApiResponse[ResourceStatsData]:
    stat = resources.get_stats(db, resource_id)
    return ApiResponse(
        message="Stats retrieved successfully",
        data=ResourceStatsData(stats=ResourceStats.model_validate(stat)),
    )

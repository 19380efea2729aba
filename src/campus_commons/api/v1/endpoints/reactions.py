"""Like/dislike endpoints for reviews, resource comments and review replies."""

from __future__ import annotations

from fastapi import APIRouter, Response, status
from sqlalchemy.orm import Session

from campus_commons.api.v1.dependencies import CurrentUserDep, SessionDep
from campus_commons.schemas.common import ApiResponse
from campus_commons.schemas.reaction import (
    ReactionCreate,
    ReactionData,
    ReactionStats,
    ReactionStatsData,
)
from campus_commons.services import reactions
from campus_commons.services.reactions import ReactionChange, ReactionTarget

router = APIRouter(tags=["reactions"])

_MESSAGES = {
    ReactionChange.ADDED: "Reaction added",
    ReactionChange.REMOVED: "Reaction removed",
    ReactionChange.SWITCHED: "Reaction updated",
}


def _react(
    target: ReactionTarget,
    entity_id: int,
    payload: ReactionCreate,
    user_id: int,
    db: Session,
    response: Response,
) -> ApiResponse[ReactionData]:
    outcome = reactions.toggle_reaction(db, target, entity_id, user_id, payload.reaction)
    if outcome.change is ReactionChange.ADDED:
        response.status_code = status.HTTP_201_CREATED
    return ApiResponse(
        message=_MESSAGES[outcome.change],
        data=ReactionData(
            reaction=outcome.reaction,
            stats=ReactionStats.model_validate(outcome.stats),
        ),
    )


def _stats(target: ReactionTarget, entity_id: int, db: Session) -> ApiResponse[ReactionStatsData]:
    stat = reactions.get_stats(db, target, entity_id)
    return ApiResponse(
        message="Stats retrieved successfully",
        data=ReactionStatsData(stats=ReactionStats.model_validate(stat)),
    )


@router.post("/reviews/{review_id}/reactions", response_model=ApiResponse[ReactionData])
async def react_to_review(
    review_id: int,
    payload: ReactionCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    response: Response,
) -> ApiResponse[ReactionData]:
    """Like or dislike a review; repeating the same reaction withdraws it."""
    return _react(reactions.REVIEW_TARGET, review_id, payload, current_user.id, db, response)


@router.get("/reviews/{review_id}/stats", response_model=ApiResponse[ReactionStatsData])
async def review_stats(review_id: int, db: SessionDep) -> ApiResponse[ReactionStatsData]:
    return _stats(reactions.REVIEW_TARGET, review_id, db)


@router.post(
    "/resource-comments/{comment_id}/reactions",
    response_model=ApiResponse[ReactionData],
)
async def react_to_resource_comment(
    comment_id: int,
    payload: ReactionCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    response: Response,
) -> ApiResponse[ReactionData]:
    return _react(
        reactions.RESOURCE_COMMENT_TARGET, comment_id, payload, current_user.id, db, response
    )


@router.get(
    "/resource-comments/{comment_id}/stats",
    response_model=ApiResponse[ReactionStatsData],
)
async def resource_comment_stats(comment_id: int, db: SessionDep) -> ApiResponse[ReactionStatsData]:
    return _stats(reactions.RESOURCE_COMMENT_TARGET, comment_id, db)


@router.post(
    "/review-comments/{comment_id}/reactions",
    response_model=ApiResponse[ReactionData],
)
async def react_to_review_comment(
    comment_id: int,
    payload: ReactionCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    response: Response,
) -> ApiResponse[ReactionData]:
    return _react(
        reactions.REVIEW_COMMENT_TARGET, comment_id, payload, current_user.id, db, response
    )


@router.get(
    "/review-comments/{comment_id}/stats",
    response_model=ApiResponse[ReactionStatsData],
)
async def review_comment_stats(comment_id: int, db: SessionDep) -> ApiResponse[ReactionStatsData]:
    return _stats(reactions.REVIEW_COMMENT_TARGET, comment_id, db)

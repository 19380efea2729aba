"""Tests for reaction toggling and stats bookkeeping."""

import pytest

from campus_commons.core.errors import NotFoundError
from campus_commons.models import ReviewReaction, ReviewStat
from campus_commons.models.enums import ContentStatus, ReactionKind
from campus_commons.services import reactions
from campus_commons.services.reactions import ReactionChange
from campus_commons.services.upsert import adjust_counter


def test_like_twice_toggles_off(db_session, review, test_user) -> None:
    first = reactions.toggle_reaction(
        db_session, reactions.REVIEW_TARGET, review.id, test_user.id, ReactionKind.LIKE
    )
    assert first.change is ReactionChange.ADDED
    assert first.reaction is ReactionKind.LIKE
    assert (first.stats.like_count, first.stats.net_score) == (1, 1)
    assert db_session.get(ReviewReaction, (test_user.id, review.id)) is not None

    second = reactions.toggle_reaction(
        db_session, reactions.REVIEW_TARGET, review.id, test_user.id, ReactionKind.LIKE
    )
    assert second.change is ReactionChange.REMOVED
    assert second.reaction is None
    assert (second.stats.like_count, second.stats.net_score) == (0, 0)
    assert db_session.get(ReviewReaction, (test_user.id, review.id)) is None


def test_switching_reaction_moves_counts(db_session, review, test_user, other_user) -> None:
    reactions.toggle_reaction(
        db_session, reactions.REVIEW_TARGET, review.id, other_user.id, ReactionKind.LIKE
    )
    reactions.toggle_reaction(
        db_session, reactions.REVIEW_TARGET, review.id, test_user.id, ReactionKind.LIKE
    )

    outcome = reactions.toggle_reaction(
        db_session, reactions.REVIEW_TARGET, review.id, test_user.id, ReactionKind.DISLIKE
    )

    assert outcome.change is ReactionChange.SWITCHED
    assert outcome.reaction is ReactionKind.DISLIKE
    assert outcome.stats.like_count == 1
    assert outcome.stats.dislike_count == 1
    assert outcome.stats.net_score == 0
    assert outcome.stats.last_reacted_at is not None


@pytest.mark.parametrize(
    "target_name,fixture_name",
    [
        ("RESOURCE_COMMENT_TARGET", "resource_comment"),
        ("REVIEW_COMMENT_TARGET", "review_comment"),
    ],
)
def test_comment_reactions(request, db_session, test_user, target_name, fixture_name) -> None:
    target = getattr(reactions, target_name)
    comment = request.getfixturevalue(fixture_name)

    outcome = reactions.toggle_reaction(
        db_session, target, comment.id, test_user.id, ReactionKind.DISLIKE
    )

    assert outcome.stats.comment_id == comment.id
    assert outcome.stats.dislike_count == 1
    assert outcome.stats.net_score == -1


def test_reacting_to_deleted_content_is_not_found(db_session, review, test_user) -> None:
    review.status = ContentStatus.DELETED
    db_session.flush()

    with pytest.raises(NotFoundError, match="Review not found"):
        reactions.toggle_reaction(
            db_session, reactions.REVIEW_TARGET, review.id, test_user.id, ReactionKind.LIKE
        )


def test_stats_created_on_first_read(db_session, review) -> None:
    stat = reactions.get_stats(db_session, reactions.REVIEW_TARGET, review.id)

    assert (stat.like_count, stat.dislike_count, stat.net_score) == (0, 0, 0)
    assert db_session.query(ReviewStat).filter_by(review_id=review.id).count() == 1


def test_stale_toggle_off_clamps_at_zero(db_session, review, test_user) -> None:
    reactions.toggle_reaction(
        db_session, reactions.REVIEW_TARGET, review.id, test_user.id, ReactionKind.LIKE
    )
    # Another request already decremented the counter.
    adjust_counter(db_session, ReviewStat.review_id, review.id, ReviewStat.like_count, -1)

    outcome = reactions.toggle_reaction(
        db_session, reactions.REVIEW_TARGET, review.id, test_user.id, ReactionKind.LIKE
    )

    assert outcome.stats.like_count == 0
    assert outcome.stats.net_score == 0

# src/campus_commons/models/__init__.py
"""SQLAlchemy models for the Campus Commons application."""

from .comment import (
    ResourceComment,
    ResourceCommentReaction,
    ResourceCommentStat,
    ReviewComment,
    ReviewCommentReaction,
    ReviewCommentStat,
)
from .course import Course, ResourceCourseLink
from .moderation import ModerationQueueItem, Report
from .notification import Notification
from .resource import Resource, ResourceFavorite, ResourceLike, ResourceStat
from .review import CourseReview, ReviewReaction, ReviewStat
from .user import User

__all__ = [
    "Course", "ResourceCourseLink",
    "CourseReview", "ReviewReaction", "ReviewStat",
    "ModerationQueueItem", "Report",
    "Notification",
    "Resource", "ResourceFavorite", "ResourceLike", "ResourceStat",
    "ResourceComment", "ResourceCommentReaction", "ResourceCommentStat",
    "ReviewComment", "ReviewCommentReaction", "ReviewCommentStat",
    "User",
]

"""initial schema

Revision ID: 5c1e2a9d7f30
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a9d7f30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enumerations are stored as VARCHAR values.
_ENUM = sa.String(length=32)


def _timestamp(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def _reaction_stats_columns() -> list[sa.Column]:
    return [
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dislike_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("net_score", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("last_reacted_at"),
    ]


def upgrade() -> None:
    """Create the full schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("nickname", sa.String(length=100), nullable=False),
        sa.Column("student_id", sa.String(length=32), nullable=True),
        sa.Column("avatar_path", sa.String(length=255), nullable=True),
        sa.Column("role", _ENUM, nullable=False),
        sa.Column("status", _ENUM, nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "courses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )
    op.create_table(
        "resources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("uploader_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("url_or_path", sa.String(length=255), nullable=True),
        sa.Column("visibility", sa.String(length=16), nullable=False),
        sa.Column("status", _ENUM, nullable=False),
        sa.Column("tags", sa.JSON(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["uploader_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_resources_uploader_id", "resources", ["uploader_id"])
    op.create_index("ix_resources_status", "resources", ["status"])

    op.create_table(
        "resource_stats",
        sa.Column("resource_id", sa.Integer(), nullable=False),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("download_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("favorite_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("like_count", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("last_interacted_at"),
        sa.ForeignKeyConstraint(["resource_id"], ["resources.id"]),
        sa.PrimaryKeyConstraint("resource_id"),
    )
    for table in ("resource_likes", "resource_favorites"):
        op.create_table(
            table,
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("resource_id", sa.Integer(), nullable=False),
            _timestamp("created_at"),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.ForeignKeyConstraint(["resource_id"], ["resources.id"]),
            sa.PrimaryKeyConstraint("user_id", "resource_id"),
        )
    op.create_table(
        "resource_course_links",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("resource_id", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["resource_id"], ["resources.id"]),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_resource_course_links_resource_id", "resource_course_links", ["resource_id"]
    )

    op.create_table(
        "course_reviews",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("rating_overall", sa.SmallInteger(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False),
        sa.Column("status", _ENUM, nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint(
            "rating_overall IS NULL OR rating_overall BETWEEN 1 AND 10",
            name="ck_course_reviews_rating_overall",
        ),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_course_reviews_author_id", "course_reviews", ["author_id"])
    op.create_index("ix_course_reviews_course_id", "course_reviews", ["course_id"])
    op.create_index("ix_course_reviews_status", "course_reviews", ["status"])

    op.create_table(
        "review_stats",
        sa.Column("review_id", sa.Integer(), nullable=False),
        *_reaction_stats_columns(),
        sa.ForeignKeyConstraint(["review_id"], ["course_reviews.id"]),
        sa.PrimaryKeyConstraint("review_id"),
    )
    op.create_table(
        "review_reactions",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("review_id", sa.Integer(), nullable=False),
        sa.Column("reaction", _ENUM, nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["review_id"], ["course_reviews.id"]),
        sa.PrimaryKeyConstraint("user_id", "review_id"),
    )

    for prefix, parent_column, parent_table in (
        ("resource", "resource_id", "resources"),
        ("review", "review_id", "course_reviews"),
    ):
        comments = f"{prefix}_comments"
        op.create_table(
            comments,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column(parent_column, sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("content", sa.Text(), nullable=False),
            sa.Column("status", _ENUM, nullable=False),
            _timestamp("created_at"),
            sa.ForeignKeyConstraint([parent_column], [f"{parent_table}.id"]),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{comments}_{parent_column}", comments, [parent_column])
        op.create_index(f"ix_{comments}_user_id", comments, ["user_id"])
        op.create_index(f"ix_{comments}_created_at", comments, ["created_at"])

        op.create_table(
            f"{prefix}_comment_stats",
            sa.Column("comment_id", sa.Integer(), nullable=False),
            *_reaction_stats_columns(),
            sa.ForeignKeyConstraint(["comment_id"], [f"{comments}.id"]),
            sa.PrimaryKeyConstraint("comment_id"),
        )
        op.create_table(
            f"{prefix}_comment_reactions",
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("comment_id", sa.Integer(), nullable=False),
            sa.Column("reaction", _ENUM, nullable=False),
            _timestamp("created_at"),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
            sa.ForeignKeyConstraint(["comment_id"], [f"{comments}.id"]),
            sa.PrimaryKeyConstraint("user_id", "comment_id"),
        )

    op.create_table(
        "reports",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("reporter_id", sa.Integer(), nullable=False),
        sa.Column("entity_type", _ENUM, nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("reason", _ENUM, nullable=False),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("status", _ENUM, nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["reporter_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reports_created_at", "reports", ["created_at"])
    op.create_index("ix_reports_entity_status", "reports", ["entity_type", "entity_id", "status"])
    op.create_index(
        "ix_reports_reporter_entity", "reports", ["reporter_id", "entity_type", "entity_id"]
    )
    op.create_index(
        "uq_reports_pending_reporter_entity",
        "reports",
        ["reporter_id", "entity_type", "entity_id"],
        unique=True,
        sqlite_where=sa.text("status = 'pending'"),
        postgresql_where=sa.text("status = 'pending'"),
    )

    op.create_table(
        "moderation_queue",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entity_type", _ENUM, nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("report_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", _ENUM, nullable=False),
        sa.Column("handled_by", sa.Integer(), nullable=True),
        _timestamp("handled_at"),
        sa.Column("notes", sa.Text(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint("report_count >= 0", name="ck_moderation_queue_report_count"),
        sa.ForeignKeyConstraint(["handled_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("entity_type", "entity_id", name="uq_moderation_queue_entity"),
    )
    op.create_index("ix_moderation_queue_status", "moderation_queue", ["status"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("type", _ENUM, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("entity_type", sa.String(length=50), nullable=True),
        sa.Column("entity_id", sa.Integer(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])
    op.create_index("ix_notifications_entity", "notifications", ["entity_type", "entity_id"])


def downgrade() -> None:
    """Drop every table created by ``upgrade``."""
    for table in (
        "notifications",
        "moderation_queue",
        "reports",
        "review_comment_reactions",
        "review_comment_stats",
        "review_comments",
        "resource_comment_reactions",
        "resource_comment_stats",
        "resource_comments",
        "review_reactions",
        "review_stats",
        "course_reviews",
        "resource_course_links",
        "resource_favorites",
        "resource_likes",
        "resource_stats",
        "resources",
        "courses",
        "users",
    ):
        op.drop_table(table)

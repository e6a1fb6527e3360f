"""Create users, calendar_events, resources and quizzes tables

Revision ID: 3b1f6c2a9d47
Revises:
Create Date: 2026-10-18 09:00:00.000000+00:00

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b1f6c2a9d47"  # pragma: allowlist secret
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Creation timestamp (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Last update timestamp (UTC)",
        ),
    ]


def _owner_column() -> sa.Column:
    return sa.Column(
        "user_id",
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True, comment="UUID primary key"),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("full_name", sa.String(length=200), nullable=True),
        sa.Column("school_name", sa.String(length=300), nullable=True),
        sa.Column("subjects_taught", sa.JSON(), nullable=False),
        sa.Column("grade_levels", sa.JSON(), nullable=False),
        sa.Column("years_of_experience", sa.Integer(), nullable=True),
        sa.Column("teaching_style", sa.Text(), nullable=True),
        sa.Column("interests", sa.JSON(), nullable=False),
        sa.Column("notification_preferences", sa.JSON(), nullable=True),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "calendar_events",
        sa.Column("id", sa.Uuid(), primary_key=True, comment="UUID primary key"),
        _owner_column(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("type", sa.String(length=20), nullable=False, comment="class, lab, meeting"),
        sa.Column("completed", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_calendar_events_user_id", "calendar_events", ["user_id"])
    op.create_index(
        "ix_calendar_events_user_start", "calendar_events", ["user_id", "completed", "start_time"]
    )

    op.create_table(
        "resources",
        sa.Column("id", sa.Uuid(), primary_key=True, comment="UUID primary key"),
        _owner_column(),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("url", sa.String(length=2048), nullable=True),
        sa.Column("file_path", sa.String(length=512), nullable=True),
        sa.Column("file_type", sa.String(length=200), nullable=True),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_resources_user_id", "resources", ["user_id"])

    op.create_table(
        "quizzes",
        sa.Column("id", sa.Uuid(), primary_key=True, comment="UUID primary key"),
        _owner_column(),
        sa.Column("topic", sa.String(length=300), nullable=False),
        sa.Column("difficulty", sa.String(length=10), nullable=False),
        sa.Column("questions", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_quizzes_user_id", "quizzes", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_quizzes_user_id", table_name="quizzes")
    op.drop_table("quizzes")
    op.drop_index("ix_resources_user_id", table_name="resources")
    op.drop_table("resources")
    op.drop_index("ix_calendar_events_user_start", table_name="calendar_events")
    op.drop_index("ix_calendar_events_user_id", table_name="calendar_events")
    op.drop_table("calendar_events")
    op.drop_table("users")

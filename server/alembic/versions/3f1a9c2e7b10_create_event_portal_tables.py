"""Create events, participants and admin_users tables

Revision ID: 3f1a9c2e7b10
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1a9c2e7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

admin_role = sa.Enum("admin", "super_admin", name="admin_role")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.VARCHAR(), nullable=False),
        sa.Column("description", sa.TEXT(), nullable=True),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("registration_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("registration_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.BOOLEAN(), nullable=False, server_default=sa.true()),
        sa.Column(
            "registration_open", sa.BOOLEAN(), nullable=False, server_default=sa.true()
        ),
        sa.Column("banner_url", sa.VARCHAR(), nullable=True),
        sa.Column("form_fields", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_events_event_date", "events", ["event_date"])

    op.create_table(
        "participants",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("event_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.VARCHAR(), nullable=False),
        sa.Column("responses", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id", "user_id", name="uq_participants_event_user"),
    )
    op.create_index("ix_participants_event_id", "participants", ["event_id"])
    op.create_index("ix_participants_user_id", "participants", ["user_id"])

    op.create_table(
        "admin_users",
        sa.Column("user_id", sa.VARCHAR(), nullable=False),
        sa.Column("role", admin_role, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("admin_users")
    op.drop_index("ix_participants_user_id", table_name="participants")
    op.drop_index("ix_participants_event_id", table_name="participants")
    op.drop_table("participants")
    op.drop_index("ix_events_event_date", table_name="events")
    op.drop_table("events")
    admin_role.drop(op.get_bind(), checkfirst=True)

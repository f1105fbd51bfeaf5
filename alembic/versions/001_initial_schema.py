"""Initial schema - team groups, group members, entity permission grants.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "team_groups",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("team_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by", sa.UUID(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("archived_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_team_groups_team_id", "team_groups", ["team_id"])
    # Name unique per team among active groups only
    op.create_index(
        "uq_team_groups_team_name_active",
        "team_groups",
        ["team_id", "name"],
        unique=True,
        postgresql_where=sa.text("archived_at IS NULL"),
    )

    op.create_table(
        "team_group_members",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("group_id", sa.UUID(), sa.ForeignKey("team_groups.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("added_by", sa.UUID(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("group_id", "user_id", name="uq_team_group_members_group_user"),
    )
    op.create_index("ix_team_group_members_user_id", "team_group_members", ["user_id"])

    op.create_table(
        "entity_permission_grants",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", sa.UUID(), nullable=False),
        sa.Column("subject_type", sa.String(20), nullable=False),
        sa.Column("subject_id", sa.UUID(), nullable=False),
        sa.Column("permission_role", sa.String(20), nullable=False),
        sa.Column("granted_by", sa.UUID(), nullable=True),
        sa.Column("granted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revoked_by", sa.UUID(), nullable=True),
        sa.CheckConstraint(
            "entity_type IN ('track', 'subtrack', 'tracker')",
            name="ck_entity_permission_grants_entity_type",
        ),
        sa.CheckConstraint(
            "subject_type IN ('user', 'group')",
            name="ck_entity_permission_grants_subject_type",
        ),
        sa.CheckConstraint(
            "permission_role IN ('owner', 'editor', 'commenter', 'viewer')",
            name="ck_entity_permission_grants_role",
        ),
        sa.CheckConstraint(
            "entity_type <> 'tracker' OR permission_role IN ('editor', 'viewer')",
            name="ck_entity_permission_grants_tracker_role",
        ),
    )
    # One active grant per (entity, subject); revoked rows are kept for audit
    op.create_index(
        "uq_entity_permission_grants_active",
        "entity_permission_grants",
        ["entity_type", "entity_id", "subject_type", "subject_id"],
        unique=True,
        postgresql_where=sa.text("revoked_at IS NULL"),
    )
    op.create_index(
        "ix_entity_permission_grants_subject",
        "entity_permission_grants",
        ["subject_type", "subject_id"],
        postgresql_where=sa.text("revoked_at IS NULL"),
    )


def downgrade() -> None:
    op.drop_table("entity_permission_grants")
    op.drop_table("team_group_members")
    op.drop_table("team_groups")

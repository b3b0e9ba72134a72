"""Initial schema - user_account, permission_grant, seed, survey.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "user_account",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("employee_key", sa.String(64), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("location_id", sa.UUID(), nullable=True),
        sa.Column("approval_status", sa.String(16), nullable=False, server_default="Pending"),
        sa.Column(
            "approved_by_user_id",
            sa.UUID(),
            sa.ForeignKey("user_account.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "role IN ('Volunteer', 'Manager', 'Admin')", name="ck_user_account_role"
        ),
        sa.CheckConstraint(
            "approval_status IN ('Pending', 'Approved', 'Rejected')",
            name="ck_user_account_approval_status",
        ),
    )
    op.create_index(
        "ix_user_account_employee_key", "user_account", ["employee_key"], unique=True
    )

    op.create_table(
        "permission_grant",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "user_id",
            sa.UUID(),
            sa.ForeignKey("user_account.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("resource", sa.String(32), nullable=False),
        sa.Column("scope", sa.String(16), nullable=False, server_default="all"),
        sa.Column(
            "conditions",
            postgresql.ARRAY(sa.String(32)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_permission_grant_user_id", "permission_grant", ["user_id"])

    op.create_table(
        "seed",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("location_id", sa.UUID(), nullable=False),
        sa.Column("is_fallback", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_seed_code", "seed", ["code"], unique=True)
    op.create_index("ix_seed_location_id", "seed", ["location_id"])

    op.create_table(
        "survey",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("parent_code", sa.String(32), nullable=False),
        sa.Column("child_codes", postgresql.ARRAY(sa.Text()), nullable=False),
        sa.Column(
            "created_by_user_id",
            sa.UUID(),
            sa.ForeignKey("user_account.id"),
            nullable=False,
        ),
        sa.Column("owner_employee_key", sa.String(64), nullable=False),
        sa.Column("location_id", sa.UUID(), nullable=False),
        sa.Column(
            "responses",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("cardinality(child_codes) = 3", name="ck_survey_child_codes"),
    )
    # One survey per code, deleted or not: a consumed child slot stays consumed.
    op.create_index("ix_survey_code", "survey", ["code"], unique=True)
    op.create_index("ix_survey_parent_code", "survey", ["parent_code"])
    op.create_index(
        "ix_survey_child_codes", "survey", ["child_codes"], postgresql_using="gin"
    )
    op.create_index("ix_survey_created_by_user_id", "survey", ["created_by_user_id"])
    op.create_index("ix_survey_location_id", "survey", ["location_id"])


def downgrade() -> None:
    op.drop_table("survey")
    op.drop_table("seed")
    op.drop_table("permission_grant")
    op.drop_table("user_account")

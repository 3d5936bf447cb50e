"""initial schema: users, sessions, plans and plan contents

Revision ID: 0f3a9c2d7b14
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0f3a9c2d7b14"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("pw_hash", sa.Text(), nullable=False),
        sa.Column("two_fa_secret", sa.Text(), nullable=True),
        sa.Column("is_dev_mode", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("invalid_login_attempts", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("lock_duration_s", sa.Integer(), server_default=sa.text("60"), nullable=False),
        sa.Column("lock_duration_factor", sa.Integer(), server_default=sa.text("2"), nullable=False),
        sa.Column("lock_duration_cap_s", sa.Integer(), server_default=sa.text("3600"), nullable=False),
        sa.Column("locked_until", sa.DateTime(), nullable=True),
        _created_at(),
        sa.UniqueConstraint("username"),
        sa.CheckConstraint("invalid_login_attempts >= 0", name="ck_users_invalid_login_attempts"),
    )

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("session_id"),
    )
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"], unique=False)

    op.create_table(
        "plans",
        sa.Column("name", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("last_modified", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("type", sa.String(length=64), server_default="info", nullable=False),
        sa.Column("plan_name", sa.String(length=64), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=64), server_default="unread", nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["plan_name"], ["plans.name"], ondelete="CASCADE"),
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("icon", sa.Text(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )

    op.create_table(
        "currencies",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("code", sa.String(length=3), primary_key=True),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )

    # currency references carry no ON DELETE clause: deleting a used currency fails
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("plan_name", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("balance", sa.Numeric(10, 2), server_default=sa.text("0"), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("savings_type", sa.String(length=64), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["plan_name"], ["plans.name"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["currency"], ["currencies.code"]),
    )

    op.create_table(
        "budgets",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("plan_name", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("interval", sa.String(length=64), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["plan_name"], ["plans.name"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["currency"], ["currencies.code"]),
    )

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("plan_name", sa.String(length=64), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("from_account", sa.Integer(), nullable=True),
        sa.Column("to_account", sa.Integer(), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("statement", sa.Text(), nullable=True),
        sa.Column("is_cancelled", sa.Boolean(), server_default=sa.false(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["plan_name"], ["plans.name"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_account"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["to_account"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["currency"], ["currencies.code"]),
    )

    op.create_table(
        "automations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("plan_name", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("from_account", sa.Integer(), nullable=True),
        sa.Column("to_account", sa.Integer(), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("statement", sa.Text(), nullable=True),
        sa.Column("frequency", sa.String(length=64), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_paused", sa.Boolean(), server_default=sa.false(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["plan_name"], ["plans.name"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["from_account"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["to_account"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["currency"], ["currencies.code"]),
    )

    op.create_table(
        "account_tags",
        sa.Column("account_id", sa.Integer(), primary_key=True),
        sa.Column("tag_id", sa.Integer(), primary_key=True),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
    )

    op.create_table(
        "transaction_tags",
        sa.Column("transaction_id", sa.Integer(), primary_key=True),
        sa.Column("tag_id", sa.Integer(), primary_key=True),
        sa.ForeignKeyConstraint(["transaction_id"], ["transactions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
    )


def downgrade() -> None:
    op.drop_table("transaction_tags")
    op.drop_table("account_tags")
    op.drop_table("automations")
    op.drop_table("transactions")
    op.drop_table("budgets")
    op.drop_table("accounts")
    op.drop_table("currencies")
    op.drop_table("tags")
    op.drop_table("notifications")
    op.drop_table("plans")
    op.drop_index("ix_sessions_user_id", table_name="sessions")
    op.drop_table("sessions")
    op.drop_table("users")

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    false,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .core.database import Base


def utcnow_naive() -> datetime:
    """Return the current UTC time without tzinfo (columns are TIMESTAMP WITHOUT TIME ZONE)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Money columns are DECIMAL(10, 2) everywhere
Money = Numeric(10, 2)


class CreatedAtMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow_naive, server_default=func.now(), nullable=False
    )


class NotificationStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    ARCHIVED = "archived"


class User(Base, CreatedAtMixin):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    pw_hash: Mapped[str] = mapped_column(Text, nullable=False)
    two_fa_secret: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    is_dev_mode: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false(), nullable=False)

    # Lockout policy
    invalid_login_attempts: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )
    lock_duration_s: Mapped[int] = mapped_column(Integer, default=60, server_default=text("60"), nullable=False)
    lock_duration_factor: Mapped[int] = mapped_column(Integer, default=2, server_default=text("2"), nullable=False)
    lock_duration_cap_s: Mapped[int] = mapped_column(
        Integer, default=3600, server_default=text("3600"), nullable=False
    )
    locked_until: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, default=None)

    sessions: Mapped[list["Session"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    plans: Mapped[list["Plan"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    tags: Mapped[list["Tag"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    currencies: Mapped[list["Currency"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("invalid_login_attempts >= 0", name="ck_users_invalid_login_attempts"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User id={self.id!r} username={self.username!r}>"


class Session(Base):
    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow_naive, server_default=func.now(), nullable=False
    )

    user: Mapped[User] = relationship(back_populates="sessions")

    __table_args__ = (Index("ix_sessions_user_id", "user_id"),)


class Plan(Base):
    """Named workspace owned by one user. The name is the primary key, so it is unique across all users."""

    __tablename__ = "plans"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    last_modified: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow_naive, onupdate=utcnow_naive, server_default=func.now(), nullable=False
    )

    user: Mapped[User] = relationship(back_populates="plans")
    notifications: Mapped[list["Notification"]] = relationship(
        back_populates="plan", cascade="all, delete-orphan", passive_deletes=True
    )
    accounts: Mapped[list["Account"]] = relationship(
        back_populates="plan", cascade="all, delete-orphan", passive_deletes=True
    )
    budgets: Mapped[list["Budget"]] = relationship(
        back_populates="plan", cascade="all, delete-orphan", passive_deletes=True
    )
    transactions: Mapped[list["Transaction"]] = relationship(
        back_populates="plan", cascade="all, delete-orphan", passive_deletes=True
    )
    automations: Mapped[list["Automation"]] = relationship(
        back_populates="plan", cascade="all, delete-orphan", passive_deletes=True
    )


class Notification(Base, CreatedAtMixin):
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type: Mapped[str] = mapped_column(String(64), default="info", server_default="info", nullable=False)
    plan_name: Mapped[str] = mapped_column(ForeignKey("plans.name", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(64), default=NotificationStatus.UNREAD.value, server_default="unread", nullable=False
    )

    plan: Mapped[Plan] = relationship(back_populates="notifications")


class Tag(Base, CreatedAtMixin):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    icon: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped[User] = relationship(back_populates="tags")


class Currency(Base):
    __tablename__ = "currencies"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    code: Mapped[str] = mapped_column(String(3), primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)

    user: Mapped[User] = relationship(back_populates="currencies")


class Account(Base, CreatedAtMixin):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    plan_name: Mapped[str] = mapped_column(ForeignKey("plans.name", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    balance: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"), server_default=text("0"), nullable=False)
    # No ON DELETE clause: a referenced currency cannot be removed
    currency: Mapped[str] = mapped_column(ForeignKey("currencies.code"), nullable=False)
    savings_type: Mapped[str | None] = mapped_column(String(64), nullable=True, default=None)

    plan: Mapped[Plan] = relationship(back_populates="accounts")
    tags: Mapped[list[Tag]] = relationship(secondary="account_tags", viewonly=True, order_by="Tag.id")


class Budget(Base, CreatedAtMixin):
    __tablename__ = "budgets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    plan_name: Mapped[str] = mapped_column(ForeignKey("plans.name", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Money, nullable=False)
    interval: Mapped[str] = mapped_column(String(64), nullable=False)
    currency: Mapped[str] = mapped_column(ForeignKey("currencies.code"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    plan: Mapped[Plan] = relationship(back_populates="budgets")


class Transaction(Base, CreatedAtMixin):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    plan_name: Mapped[str] = mapped_column(ForeignKey("plans.name", ondelete="CASCADE"), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    from_account: Mapped[int | None] = mapped_column(ForeignKey("accounts.id", ondelete="CASCADE"), nullable=True)
    to_account: Mapped[int | None] = mapped_column(ForeignKey("accounts.id", ondelete="CASCADE"), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Money, nullable=False)
    currency: Mapped[str] = mapped_column(ForeignKey("currencies.code"), nullable=False)
    statement: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_cancelled: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false(), nullable=False)

    plan: Mapped[Plan] = relationship(back_populates="transactions")
    tags: Mapped[list[Tag]] = relationship(secondary="transaction_tags", viewonly=True, order_by="Tag.id")


class Automation(Base, CreatedAtMixin):
    """Template for a recurring transaction; nothing in this package materializes it."""

    __tablename__ = "automations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    plan_name: Mapped[str] = mapped_column(ForeignKey("plans.name", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    from_account: Mapped[int | None] = mapped_column(ForeignKey("accounts.id", ondelete="CASCADE"), nullable=True)
    to_account: Mapped[int | None] = mapped_column(ForeignKey("accounts.id", ondelete="CASCADE"), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Money, nullable=False)
    currency: Mapped[str] = mapped_column(ForeignKey("currencies.code"), nullable=False)
    statement: Mapped[str | None] = mapped_column(Text, nullable=True)
    frequency: Mapped[str] = mapped_column(String(64), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_paused: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false(), nullable=False)

    plan: Mapped[Plan] = relationship(back_populates="automations")


class AccountTag(Base):
    __tablename__ = "account_tags"

    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True)
    tag_id: Mapped[int] = mapped_column(ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)


class TransactionTag(Base):
    __tablename__ = "transaction_tags"

    transaction_id: Mapped[int] = mapped_column(
        ForeignKey("transactions.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[int] = mapped_column(ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

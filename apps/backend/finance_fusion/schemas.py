from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import NotificationStatus


class Vitals(BaseModel):
    status: str


class Message(BaseModel):
    message: str


# ===== Users / auth =====

class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=72)


class UserUpdate(BaseModel):
    password: str = Field(..., min_length=1, max_length=72)


class UserPublic(BaseModel):
    """User without password hash, 2FA secret or lockout bookkeeping."""

    id: int
    username: str
    created_at: datetime
    is_dev_mode: bool

    model_config = ConfigDict(from_attributes=True)


class LoginInfo(BaseModel):
    username: str
    password: str


class LoginResult(BaseModel):
    message: str
    token: str
    expires_at: datetime


# ===== Plans =====

class PlanOut(BaseModel):
    name: str
    user_id: int
    last_modified: datetime

    model_config = ConfigDict(from_attributes=True)


# ===== Currencies =====

class CurrencyCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=16)
    name: str = Field(..., min_length=1, max_length=64)


class CurrencyOut(BaseModel):
    code: str
    name: str
    user_id: int

    model_config = ConfigDict(from_attributes=True)


# ===== Tags =====

class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    icon: str = Field(..., min_length=1)


class TagOut(BaseModel):
    id: int
    user_id: int
    name: str
    icon: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ===== Accounts =====

class AccountCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    balance: Decimal = Decimal("0")
    currency: str = Field(..., min_length=3, max_length=3)
    savings_type: Optional[str] = Field(default=None, max_length=64)


class AccountUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    balance: Optional[Decimal] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    savings_type: Optional[str] = Field(default=None, max_length=64)


class AccountOut(BaseModel):
    id: int
    plan_name: str
    name: str
    balance: Decimal
    currency: str
    savings_type: Optional[str] = None
    created_at: datetime
    tags: list[TagOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


# ===== Budgets =====

class BudgetCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    amount: Decimal
    interval: str = Field(..., min_length=1, max_length=64)
    currency: str = Field(..., min_length=3, max_length=3)
    start_date: date
    end_date: Optional[date] = None


class BudgetUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    amount: Optional[Decimal] = None
    interval: Optional[str] = Field(default=None, min_length=1, max_length=64)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class BudgetOut(BaseModel):
    id: int
    plan_name: str
    name: str
    amount: Decimal
    interval: str
    currency: str
    start_date: date
    end_date: Optional[date] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ===== Transactions =====

class TransactionCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=64)
    from_account: Optional[int] = None
    to_account: Optional[int] = None
    amount: Decimal
    currency: str = Field(..., min_length=3, max_length=3)
    statement: Optional[str] = None


class TransactionUpdate(BaseModel):
    type: Optional[str] = Field(default=None, min_length=1, max_length=64)
    from_account: Optional[int] = None
    to_account: Optional[int] = None
    amount: Optional[Decimal] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    statement: Optional[str] = None


class TransactionOut(BaseModel):
    id: int
    plan_name: str
    type: str
    from_account: Optional[int] = None
    to_account: Optional[int] = None
    amount: Decimal
    currency: str
    statement: Optional[str] = None
    is_cancelled: bool
    created_at: datetime
    tags: list[TagOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


# ===== Automations =====

class AutomationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)
    type: str = Field(..., min_length=1, max_length=64)
    from_account: Optional[int] = None
    to_account: Optional[int] = None
    amount: Decimal
    currency: str = Field(..., min_length=3, max_length=3)
    statement: Optional[str] = None
    frequency: str = Field(..., min_length=1, max_length=64)
    start_date: date
    end_date: Optional[date] = None


class AutomationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    type: Optional[str] = Field(default=None, min_length=1, max_length=64)
    from_account: Optional[int] = None
    to_account: Optional[int] = None
    amount: Optional[Decimal] = None
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    statement: Optional[str] = None
    frequency: Optional[str] = Field(default=None, min_length=1, max_length=64)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class AutomationOut(BaseModel):
    id: int
    plan_name: str
    name: str
    type: str
    from_account: Optional[int] = None
    to_account: Optional[int] = None
    amount: Decimal
    currency: str
    statement: Optional[str] = None
    frequency: str
    start_date: date
    end_date: Optional[date] = None
    is_paused: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ===== Notifications =====

class NotificationCreate(BaseModel):
    type: Optional[str] = Field(default=None, max_length=64)
    title: str = Field(..., min_length=1)
    body: str


class NotificationUpdate(BaseModel):
    status: NotificationStatus


class NotificationOut(BaseModel):
    id: int
    plan_name: str
    type: str
    title: str
    body: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

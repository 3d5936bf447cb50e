from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import Base, atomic
from finance_fusion.errors import InvalidInput, NotFound, translate_integrity_error
from finance_fusion.services.currency_service import CurrencyService

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=Base)

# DECIMAL(10, 2): eight integer digits
_MONEY_LIMIT = Decimal("100000000")
_CENT = Decimal("0.01")


def to_money(value: Any, field: str = "amount") -> Decimal:
    try:
        amount = Decimal(str(value)).quantize(_CENT)
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInput(f"{field} is not a decimal number") from exc
    if not amount.is_finite() or abs(amount) >= _MONEY_LIMIT:
        raise InvalidInput(f"{field} does not fit DECIMAL(10, 2)")
    return amount


def check_date_range(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and end < start:
        raise InvalidInput("end_date must not be before start_date")


class PlanScopedService(Generic[RowT]):
    """CRUD for rows that live inside a plan (``plan_name`` foreign key).

    Every mutation refreshes the plan's ``last_modified`` in the same transaction.
    """

    model: type[RowT]
    label: str = "Record"

    def __init__(self, db: Session) -> None:
        self.db = db
        self.currencies = CurrencyService(db)

    def list(self, plan: models.Plan) -> list[RowT]:
        return (
            self.db.query(self.model)
            .filter(self.model.plan_name == plan.name)  # type: ignore[attr-defined]
            .order_by(self.model.id)  # type: ignore[attr-defined]
            .all()
        )

    def get(self, plan: models.Plan, row_id: int) -> RowT:
        row = self.db.get(self.model, row_id)
        if row is None or row.plan_name != plan.name:  # type: ignore[attr-defined]
            raise NotFound(f"{self.label} not found")
        return row

    def create(self, plan: models.Plan, data: dict[str, Any]) -> RowT:
        values = self.clean(plan, dict(data), current=None)
        row = self.model(plan_name=plan.name, **values)
        self._save(plan, row, action="creating")
        return row

    def update(self, plan: models.Plan, row: RowT, patch: dict[str, Any]) -> RowT:
        if not patch:
            return row
        values = self.clean(plan, dict(patch), current=row)
        for key, value in values.items():
            setattr(row, key, value)
        self._save(plan, row, action="updating")
        return row

    def delete(self, plan: models.Plan, row: RowT) -> None:
        with atomic(self.db):
            self.db.delete(row)
            plan.last_modified = models.utcnow_naive()

    # ---- Hooks / helpers -------------------------------------------------
    def clean(self, plan: models.Plan, data: dict[str, Any], *, current: RowT | None) -> dict[str, Any]:
        """Validate and normalize incoming values; subclasses extend this."""
        if "currency" in data:
            if data["currency"] is None:
                raise InvalidInput("currency must not be null")
            data["currency"] = self.currencies.require(data["currency"])
        for field in ("amount", "balance"):
            if field in data and data[field] is not None:
                data[field] = to_money(data[field], field)
        return data

    def require_account(self, plan: models.Plan, account_id: int | None, field: str) -> int | None:
        if account_id is None:
            return None
        account = self.db.get(models.Account, account_id)
        if account is None or account.plan_name != plan.name:
            raise InvalidInput(f"{field} must reference an account in plan \"{plan.name}\"")
        return account_id

    def _save(self, plan: models.Plan, row: RowT, *, action: str) -> None:
        try:
            with atomic(self.db):
                self.db.add(row)
                plan.last_modified = models.utcnow_naive()
        except IntegrityError as exc:
            logger.error("Failed %s %s in plan \"%s\" (%s)", action, self.label.lower(), plan.name, exc.orig)
            raise translate_integrity_error(exc) from exc
        self.db.refresh(row)

from __future__ import annotations

from typing import Any

from finance_fusion import models
from finance_fusion.core.database import atomic
from finance_fusion.errors import InvalidInput
from finance_fusion.services.plan_scope import PlanScopedService


def check_account_pair(from_account: int | None, to_account: int | None) -> None:
    """Shared rule for transactions and automations.

    Which side is set encodes the kind of movement (income: to only, expense:
    from only, transfer: both), so at least one side is required and a transfer
    cannot loop back onto the same account.
    """
    if from_account is None and to_account is None:
        raise InvalidInput("At least one of from_account/to_account is required")
    if from_account is not None and from_account == to_account:
        raise InvalidInput("from_account and to_account must differ")


class TransactionService(PlanScopedService[models.Transaction]):
    """Stores transactions as entered. Account balances are not recomputed here."""

    model = models.Transaction
    label = "Transaction"

    def clean(self, plan: models.Plan, data: dict[str, Any], *, current: models.Transaction | None) -> dict[str, Any]:
        if current is None:
            missing = [f for f in ("type", "amount", "currency") if data.get(f) is None]
            if missing:
                raise InvalidInput(f"Missing required fields: {', '.join(missing)}")
        if "type" in data:
            data["type"] = (data["type"] or "").strip()
            if not data["type"] or len(data["type"]) > 64:
                raise InvalidInput("type must be 1-64 characters")
        for field in ("from_account", "to_account"):
            if field in data:
                data[field] = self.require_account(plan, data[field], field)
        check_account_pair(
            data.get("from_account", current.from_account if current else None),
            data.get("to_account", current.to_account if current else None),
        )
        return super().clean(plan, data, current=current)

    def cancel(self, plan: models.Plan, row: models.Transaction) -> models.Transaction:
        if row.is_cancelled:
            return row
        with atomic(self.db):
            row.is_cancelled = True
            plan.last_modified = models.utcnow_naive()
        self.db.refresh(row)
        return row

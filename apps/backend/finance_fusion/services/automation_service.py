from __future__ import annotations

from typing import Any

from finance_fusion import models
from finance_fusion.core.database import atomic
from finance_fusion.errors import InvalidInput
from finance_fusion.services.plan_scope import PlanScopedService, check_date_range
from finance_fusion.services.transaction_service import check_account_pair
from finance_fusion.utils import normalize_name


class AutomationService(PlanScopedService[models.Automation]):
    """Recurring-transaction templates. Generating transactions from them is left to a scheduler."""

    model = models.Automation
    label = "Automation"

    def clean(self, plan: models.Plan, data: dict[str, Any], *, current: models.Automation | None) -> dict[str, Any]:
        if current is None:
            required = ("name", "type", "amount", "currency", "frequency", "start_date")
            missing = [f for f in required if data.get(f) is None]
            if missing:
                raise InvalidInput(f"Missing required fields: {', '.join(missing)}")
        if "name" in data:
            data["name"] = normalize_name(data["name"])
            if not data["name"] or len(data["name"]) > 64:
                raise InvalidInput("Automation name must be 1-64 characters")
        for field in ("type", "frequency"):
            if field in data:
                data[field] = (data[field] or "").strip()
                if not data[field] or len(data[field]) > 64:
                    raise InvalidInput(f"{field} must be 1-64 characters")
        for field in ("from_account", "to_account"):
            if field in data:
                data[field] = self.require_account(plan, data[field], field)
        check_account_pair(
            data.get("from_account", current.from_account if current else None),
            data.get("to_account", current.to_account if current else None),
        )
        check_date_range(
            data.get("start_date", current.start_date if current else None),
            data.get("end_date", current.end_date if current else None),
        )
        return super().clean(plan, data, current=current)

    def set_paused(self, plan: models.Plan, row: models.Automation, paused: bool) -> models.Automation:
        with atomic(self.db):
            row.is_paused = paused
            plan.last_modified = models.utcnow_naive()
        self.db.refresh(row)
        return row

    def pause(self, plan: models.Plan, row: models.Automation) -> models.Automation:
        return self.set_paused(plan, row, True)

    def resume(self, plan: models.Plan, row: models.Automation) -> models.Automation:
        return self.set_paused(plan, row, False)

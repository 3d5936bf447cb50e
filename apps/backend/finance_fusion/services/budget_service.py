from __future__ import annotations

from typing import Any

from finance_fusion import models
from finance_fusion.errors import InvalidInput
from finance_fusion.services.plan_scope import PlanScopedService, check_date_range
from finance_fusion.utils import normalize_name


class BudgetService(PlanScopedService[models.Budget]):
    model = models.Budget
    label = "Budget"

    def clean(self, plan: models.Plan, data: dict[str, Any], *, current: models.Budget | None) -> dict[str, Any]:
        if current is None:
            missing = [f for f in ("name", "amount", "interval", "currency", "start_date") if data.get(f) is None]
            if missing:
                raise InvalidInput(f"Missing required fields: {', '.join(missing)}")
        if "name" in data:
            data["name"] = normalize_name(data["name"])
            if not data["name"] or len(data["name"]) > 64:
                raise InvalidInput("Budget name must be 1-64 characters")
        start = data.get("start_date", current.start_date if current else None)
        end = data.get("end_date", current.end_date if current else None)
        check_date_range(start, end)
        return super().clean(plan, data, current=current)

from __future__ import annotations

from typing import Any

from finance_fusion import models
from finance_fusion.errors import InvalidInput
from finance_fusion.services.plan_scope import PlanScopedService
from finance_fusion.utils import normalize_name


class AccountService(PlanScopedService[models.Account]):
    model = models.Account
    label = "Account"

    def clean(self, plan: models.Plan, data: dict[str, Any], *, current: models.Account | None) -> dict[str, Any]:
        if current is None and "currency" not in data:
            raise InvalidInput("currency is required")
        if "name" in data or current is None:
            name = normalize_name(data.get("name"))
            if not name or len(name) > 64:
                raise InvalidInput("Account name must be 1-64 characters")
            data["name"] = name
        if data.get("balance") is None:
            data.pop("balance", None)
        return super().clean(plan, data, current=current)

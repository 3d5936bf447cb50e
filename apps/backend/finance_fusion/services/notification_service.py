from __future__ import annotations

from typing import Any

from finance_fusion import models
from finance_fusion.core.database import atomic
from finance_fusion.errors import InvalidInput
from finance_fusion.services.plan_scope import PlanScopedService

_STATUSES = {s.value for s in models.NotificationStatus}


class NotificationService(PlanScopedService[models.Notification]):
    model = models.Notification
    label = "Notification"

    def list(self, plan: models.Plan, status: str | None = None) -> list[models.Notification]:  # type: ignore[override]
        q = self.db.query(models.Notification).filter(models.Notification.plan_name == plan.name)
        if status is not None:
            q = q.filter(models.Notification.status == status)
        return q.order_by(models.Notification.created_at.desc(), models.Notification.id.desc()).all()

    def clean(self, plan: models.Plan, data: dict[str, Any], *, current: models.Notification | None) -> dict[str, Any]:
        if current is None and (not data.get("title") or data.get("body") is None):
            raise InvalidInput("title and body are required")
        if data.get("type") is None:
            data.pop("type", None)
        if "status" in data:
            if data["status"] not in _STATUSES:
                raise InvalidInput(f"status must be one of {sorted(_STATUSES)}")
        return super().clean(plan, data, current=current)

    def mark(self, plan: models.Plan, row: models.Notification, status: str) -> models.Notification:
        if status not in _STATUSES:
            raise InvalidInput(f"status must be one of {sorted(_STATUSES)}")
        with atomic(self.db):
            row.status = status
            plan.last_modified = models.utcnow_naive()
        self.db.refresh(row)
        return row

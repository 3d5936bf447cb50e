from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import get_plan
from finance_fusion.schemas import NotificationCreate, NotificationOut, NotificationUpdate
from finance_fusion.services import NotificationService

router = APIRouter(prefix="/plans/{plan_name}/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationOut])
def list_notifications(
    status: Optional[models.NotificationStatus] = Query(None, description="Filter by status"),
    db: Session = Depends(get_db),
    plan: models.Plan = Depends(get_plan),
):
    return NotificationService(db).list(plan, status.value if status else None)


@router.post("", response_model=NotificationOut, status_code=201)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    plan: models.Plan = Depends(get_plan),
):
    return NotificationService(db).create(plan, payload.model_dump())


@router.patch("/{notification_id}", response_model=NotificationOut)
def update_notification(
    notification_id: int,
    payload: NotificationUpdate,
    db: Session = Depends(get_db),
    plan: models.Plan = Depends(get_plan),
):
    svc = NotificationService(db)
    return svc.mark(plan, svc.get(plan, notification_id), payload.status.value)


@router.delete("/{notification_id}", status_code=204)
def delete_notification(notification_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    svc = NotificationService(db)
    svc.delete(plan, svc.get(plan, notification_id))
    return None

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import get_plan
from finance_fusion.schemas import AutomationCreate, AutomationOut, AutomationUpdate
from finance_fusion.services import AutomationService

router = APIRouter(prefix="/plans/{plan_name}/automations", tags=["automations"])


@router.get("", response_model=list[AutomationOut])
def list_automations(db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return AutomationService(db).list(plan)


@router.post("", response_model=AutomationOut, status_code=201)
def create_automation(payload: AutomationCreate, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return AutomationService(db).create(plan, payload.model_dump())


@router.get("/{automation_id}", response_model=AutomationOut)
def get_automation(automation_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return AutomationService(db).get(plan, automation_id)


@router.patch("/{automation_id}", response_model=AutomationOut)
def update_automation(
    automation_id: int,
    payload: AutomationUpdate,
    db: Session = Depends(get_db),
    plan: models.Plan = Depends(get_plan),
):
    svc = AutomationService(db)
    return svc.update(plan, svc.get(plan, automation_id), payload.model_dump(exclude_unset=True))


@router.delete("/{automation_id}", status_code=204)
def delete_automation(automation_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    svc = AutomationService(db)
    svc.delete(plan, svc.get(plan, automation_id))
    return None


@router.post("/{automation_id}/pause", response_model=AutomationOut)
def pause_automation(automation_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    svc = AutomationService(db)
    return svc.pause(plan, svc.get(plan, automation_id))


@router.post("/{automation_id}/resume", response_model=AutomationOut)
def resume_automation(automation_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    svc = AutomationService(db)
    return svc.resume(plan, svc.get(plan, automation_id))

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import get_current_user
from finance_fusion.errors import NotFound
from finance_fusion.schemas import PlanOut
from finance_fusion.services import PlanService

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get("", response_model=list[PlanOut])
def list_plans(db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    return PlanService(db).list_for_user(current_user.id)


@router.post("/{plan_name}", response_model=PlanOut, status_code=201)
def create_plan(plan_name: str, db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    return PlanService(db).create(plan_name, current_user.id)


@router.delete("/{plan_name}", status_code=204)
def delete_plan(plan_name: str, db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    if not PlanService(db).delete(plan_name, current_user.id):
        raise NotFound("Plan not found")
    return None

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import get_plan
from finance_fusion.schemas import BudgetCreate, BudgetOut, BudgetUpdate
from finance_fusion.services import BudgetService

router = APIRouter(prefix="/plans/{plan_name}/budgets", tags=["budgets"])


@router.get("", response_model=list[BudgetOut])
def list_budgets(db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return BudgetService(db).list(plan)


@router.post("", response_model=BudgetOut, status_code=201)
def create_budget(payload: BudgetCreate, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return BudgetService(db).create(plan, payload.model_dump())


@router.get("/{budget_id}", response_model=BudgetOut)
def get_budget(budget_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return BudgetService(db).get(plan, budget_id)


@router.patch("/{budget_id}", response_model=BudgetOut)
def update_budget(
    budget_id: int,
    payload: BudgetUpdate,
    db: Session = Depends(get_db),
    plan: models.Plan = Depends(get_plan),
):
    svc = BudgetService(db)
    return svc.update(plan, svc.get(plan, budget_id), payload.model_dump(exclude_unset=True))


@router.delete("/{budget_id}", status_code=204)
def delete_budget(budget_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    svc = BudgetService(db)
    svc.delete(plan, svc.get(plan, budget_id))
    return None

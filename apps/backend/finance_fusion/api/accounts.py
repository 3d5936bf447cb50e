from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import get_plan
from finance_fusion.schemas import AccountCreate, AccountOut, AccountUpdate
from finance_fusion.services import AccountService, TagService

router = APIRouter(prefix="/plans/{plan_name}/accounts", tags=["accounts"])


@router.get("", response_model=list[AccountOut])
def list_accounts(db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return AccountService(db).list(plan)


@router.post("", response_model=AccountOut, status_code=201)
def create_account(payload: AccountCreate, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return AccountService(db).create(plan, payload.model_dump())


@router.get("/{account_id}", response_model=AccountOut)
def get_account(account_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return AccountService(db).get(plan, account_id)


@router.patch("/{account_id}", response_model=AccountOut)
def update_account(
    account_id: int,
    payload: AccountUpdate,
    db: Session = Depends(get_db),
    plan: models.Plan = Depends(get_plan),
):
    svc = AccountService(db)
    return svc.update(plan, svc.get(plan, account_id), payload.model_dump(exclude_unset=True))


@router.delete("/{account_id}", status_code=204)
def delete_account(account_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    svc = AccountService(db)
    svc.delete(plan, svc.get(plan, account_id))
    return None


@router.put("/{account_id}/tags/{tag_id}", response_model=AccountOut)
def tag_account(account_id: int, tag_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    account = AccountService(db).get(plan, account_id)
    return TagService(db).tag_account(plan, account, tag_id)


@router.delete("/{account_id}/tags/{tag_id}", response_model=AccountOut)
def untag_account(account_id: int, tag_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    account = AccountService(db).get(plan, account_id)
    return TagService(db).untag_account(account, tag_id)

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import get_plan
from finance_fusion.schemas import TransactionCreate, TransactionOut, TransactionUpdate
from finance_fusion.services import TagService, TransactionService

router = APIRouter(prefix="/plans/{plan_name}/transactions", tags=["transactions"])


@router.get("", response_model=list[TransactionOut])
def list_transactions(
    include_cancelled: bool = Query(True),
    db: Session = Depends(get_db),
    plan: models.Plan = Depends(get_plan),
):
    rows = TransactionService(db).list(plan)
    if not include_cancelled:
        rows = [r for r in rows if not r.is_cancelled]
    return rows


@router.post("", response_model=TransactionOut, status_code=201)
def create_transaction(payload: TransactionCreate, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return TransactionService(db).create(plan, payload.model_dump())


@router.get("/{txn_id}", response_model=TransactionOut)
def get_transaction(txn_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    return TransactionService(db).get(plan, txn_id)


@router.patch("/{txn_id}", response_model=TransactionOut)
def update_transaction(
    txn_id: int,
    payload: TransactionUpdate,
    db: Session = Depends(get_db),
    plan: models.Plan = Depends(get_plan),
):
    svc = TransactionService(db)
    return svc.update(plan, svc.get(plan, txn_id), payload.model_dump(exclude_unset=True))


@router.delete("/{txn_id}", status_code=204)
def delete_transaction(txn_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    svc = TransactionService(db)
    svc.delete(plan, svc.get(plan, txn_id))
    return None


@router.post("/{txn_id}/cancel", response_model=TransactionOut)
def cancel_transaction(txn_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    svc = TransactionService(db)
    return svc.cancel(plan, svc.get(plan, txn_id))


@router.put("/{txn_id}/tags/{tag_id}", response_model=TransactionOut)
def tag_transaction(txn_id: int, tag_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    txn = TransactionService(db).get(plan, txn_id)
    return TagService(db).tag_transaction(plan, txn, tag_id)


@router.delete("/{txn_id}/tags/{tag_id}", response_model=TransactionOut)
def untag_transaction(txn_id: int, tag_id: int, db: Session = Depends(get_db), plan: models.Plan = Depends(get_plan)):
    txn = TransactionService(db).get(plan, txn_id)
    return TagService(db).untag_transaction(txn, tag_id)

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import get_current_user
from finance_fusion.schemas import CurrencyCreate, CurrencyOut
from finance_fusion.services import CurrencyService

router = APIRouter(prefix="/currencies", tags=["currencies"])


@router.get("", response_model=list[CurrencyOut])
def list_currencies(
    mine: bool = Query(False, description="Only currencies registered by the caller"),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    svc = CurrencyService(db)
    if mine:
        return svc.list_for_user(current_user.id)
    return svc.list_all()


@router.post("", response_model=CurrencyOut, status_code=201)
def create_currency(
    payload: CurrencyCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return CurrencyService(db).create(payload.code, payload.name, current_user.id)


@router.delete("/{code}", status_code=204)
def delete_currency(code: str, db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    CurrencyService(db).delete(code, current_user.id)
    return None

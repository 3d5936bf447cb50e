from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import get_current_user
from finance_fusion.schemas import TagCreate, TagOut
from finance_fusion.services import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagOut])
def list_tags(db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    return TagService(db).list_for_user(current_user.id)


@router.post("", response_model=TagOut, status_code=201)
def create_tag(payload: TagCreate, db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    return TagService(db).create(current_user.id, payload.name, payload.icon)


@router.delete("/{tag_id}", status_code=204)
def delete_tag(tag_id: int, db: Session = Depends(get_db), current_user: models.User = Depends(get_current_user)):
    svc = TagService(db)
    svc.delete(svc.get(current_user.id, tag_id))
    return None

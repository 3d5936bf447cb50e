from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import get_current_user
from finance_fusion.errors import Forbidden
from finance_fusion.schemas import UserCreate, UserPublic, UserUpdate
from finance_fusion.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _require_self(user_id: int, current_user: models.User) -> None:
    if user_id != current_user.id:
        raise Forbidden("Users may only modify their own account")


@router.post("", response_model=UserPublic, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).create(payload.username, payload.password)


@router.get("/username/{username}", response_model=UserPublic)
def get_user_by_username(username: str, db: Session = Depends(get_db)):
    return UserService(db).get_by_username(username)


@router.put("/{user_id}", response_model=UserPublic)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    _require_self(user_id, current_user)
    return UserService(db).update_password(current_user, payload.password)


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    response: Response,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    _require_self(user_id, current_user)
    UserService(db).delete(user_id)
    response.delete_cookie("token", path="/")
    return None

from __future__ import annotations

from typing import Optional

from fastapi import Cookie, Depends, Header
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import get_db
from finance_fusion.errors import InvalidToken
from finance_fusion.services import PlanService, SessionService

TOKEN_COOKIE = "token"


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def get_current_session(
    token: Optional[str] = Cookie(default=None),
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> models.Session:
    """Resolve the caller's session from a Bearer header, else the ``token`` cookie."""
    raw = _bearer(authorization) or token
    if not raw:
        raise InvalidToken("Missing authentication token")
    return SessionService(db).resolve(raw)


def get_current_user(
    session: models.Session = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> models.User:
    user = db.get(models.User, session.user_id)
    if user is None:
        raise InvalidToken()
    return user


def get_plan(
    plan_name: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> models.Plan:
    return PlanService(db).get(plan_name, current_user.id)

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.config import settings
from finance_fusion.core.database import get_db
from finance_fusion.core.deps import TOKEN_COOKIE, get_current_session
from finance_fusion.schemas import LoginInfo, LoginResult, Message
from finance_fusion.services import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResult)
def login(payload: LoginInfo, response: Response, db: Session = Depends(get_db)):
    svc = AuthService(db)
    session = svc.login(payload.username, payload.password)
    token = svc.sessions.issue_token(session)
    max_age = int(svc.sessions.ttl.total_seconds())
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )
    return LoginResult(message="Login successful", token=token, expires_at=session.expires_at)


@router.get("/logout", response_model=Message)
def logout(
    response: Response,
    db: Session = Depends(get_db),
    session: models.Session = Depends(get_current_session),
):
    AuthService(db).logout(session)
    response.delete_cookie(TOKEN_COOKIE, path="/")
    return Message(message="Logout successful")

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta

import jwt
from sqlalchemy import delete
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.config import settings
from finance_fusion.core.database import atomic
from finance_fusion.errors import InvalidToken, SessionExpired
from finance_fusion.security import decode_token, encode_token

logger = logging.getLogger(__name__)


class SessionService:
    """Login sessions: one row per login, referenced from a signed token."""

    def __init__(self, db: Session, *, ttl: timedelta | None = None) -> None:
        self.db = db
        self.ttl = ttl or timedelta(hours=settings.SESSION_TTL_HOURS)

    def create(self, user_id: int, *, now: datetime | None = None) -> models.Session:
        now = now or models.utcnow_naive()
        row = models.Session(user_id=user_id, session_id=uuid.uuid4(), expires_at=now + self.ttl, created_at=now)
        with atomic(self.db):
            self.db.add(row)
        self.db.refresh(row)
        logger.info("Created session for user %s (expires %s)", user_id, row.expires_at)
        return row

    def issue_token(self, row: models.Session) -> str:
        return encode_token(row.user_id, str(row.session_id), row.expires_at)

    def get_by_token_id(self, session_id: uuid.UUID) -> models.Session | None:
        return self.db.query(models.Session).filter(models.Session.session_id == session_id).first()

    def resolve(self, token: str, *, now: datetime | None = None) -> models.Session:
        """Return the live session a token refers to.

        Expired sessions are deleted on sight and reported as ``SessionExpired``;
        anything unverifiable is ``InvalidToken``.
        """
        try:
            claims = decode_token(token)
        except jwt.ExpiredSignatureError:
            claims = decode_token(token, verify_exp=False)
            self._drop(claims.get("sid"))
            raise SessionExpired()
        except jwt.InvalidTokenError as exc:
            logger.error("Failed to decode token: %s", exc)
            raise InvalidToken() from exc

        try:
            sid = uuid.UUID(str(claims["sid"]))
        except ValueError as exc:
            raise InvalidToken() from exc

        row = self.get_by_token_id(sid)
        if row is None or str(row.user_id) != str(claims["sub"]):
            raise InvalidToken()

        now = now or models.utcnow_naive()
        if row.expires_at <= now:
            self.revoke(row)
            raise SessionExpired()
        return row

    def revoke(self, row: models.Session) -> None:
        with atomic(self.db):
            self.db.delete(row)

    def purge_expired(self, *, now: datetime | None = None) -> int:
        now = now or models.utcnow_naive()
        with atomic(self.db):
            result = self.db.execute(delete(models.Session).where(models.Session.expires_at <= now))
        removed = result.rowcount or 0
        if removed:
            logger.info("Purged %s expired sessions", removed)
        return removed

    def _drop(self, sid: object) -> None:
        try:
            key = uuid.UUID(str(sid))
        except ValueError:
            return
        row = self.get_by_token_id(key)
        if row is not None:
            self.revoke(row)

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.config import settings
from finance_fusion.core.database import atomic
from finance_fusion.errors import Locked, WrongCredentials
from finance_fusion.security import verify_password
from finance_fusion.services.session_service import SessionService

logger = logging.getLogger(__name__)


class LockoutPolicy:
    """Exponential-backoff lockout driven by the per-user columns on ``users``.

    Once ``invalid_login_attempts`` reaches ``threshold`` every further failure
    locks the account for ``lock_duration_s * lock_duration_factor ** n`` seconds,
    ``n`` being the number of failures past the threshold, capped at
    ``lock_duration_cap_s``. A successful login clears both counter and lock.
    """

    def __init__(self, threshold: int | None = None) -> None:
        self.threshold = max(1, threshold if threshold is not None else settings.LOCKOUT_THRESHOLD)

    def is_locked(self, user: models.User, now: datetime) -> bool:
        return user.locked_until is not None and user.locked_until > now

    def lock_duration(self, user: models.User) -> timedelta:
        cap = max(0, user.lock_duration_cap_s)
        seconds = max(0, user.lock_duration_s)
        for _ in range(max(0, user.invalid_login_attempts - self.threshold)):
            if seconds >= cap:
                break
            seconds *= max(1, user.lock_duration_factor)
        return timedelta(seconds=min(seconds, cap))

    def release_if_expired(self, user: models.User, now: datetime) -> bool:
        """Clear a lock whose time has passed. The counter is kept so the next failure escalates."""
        if user.locked_until is not None and user.locked_until <= now:
            user.locked_until = None
            return True
        return False

    def register_failure(self, user: models.User, now: datetime) -> datetime | None:
        user.invalid_login_attempts = (user.invalid_login_attempts or 0) + 1
        if user.invalid_login_attempts >= self.threshold:
            user.locked_until = now + self.lock_duration(user)
        return user.locked_until

    def register_success(self, user: models.User) -> None:
        user.invalid_login_attempts = 0
        user.locked_until = None


class AuthService:
    def __init__(self, db: Session, *, policy: LockoutPolicy | None = None) -> None:
        self.db = db
        self.policy = policy or LockoutPolicy()
        self.sessions = SessionService(db)

    def login(self, username: str, password: str, *, now: datetime | None = None) -> models.Session:
        """Check credentials and open a session.

        Raises ``WrongCredentials`` for unknown users and bad passwords, ``Locked``
        while a lockout is in force. Failed attempts are persisted even though the
        call raises.
        """
        now = now or models.utcnow_naive()
        user = self.db.query(models.User).filter(models.User.username == username).first()
        if user is None:
            logger.info("Login attempt for unknown user \"%s\"", username)
            raise WrongCredentials()

        if self.policy.is_locked(user, now):
            logger.warning("Login refused for locked user %s (until %s)", user.id, user.locked_until)
            raise Locked(f"User is locked until {user.locked_until.isoformat(sep=' ', timespec='seconds')}")

        if not verify_password(password, user.pw_hash):
            with atomic(self.db):
                self.policy.release_if_expired(user, now)
                locked_until = self.policy.register_failure(user, now)
            if locked_until is not None:
                logger.warning(
                    "User %s locked until %s after %s failed attempts",
                    user.id,
                    locked_until,
                    user.invalid_login_attempts,
                )
            raise WrongCredentials()

        with atomic(self.db):
            self.policy.register_success(user)
        return self.sessions.create(user.id, now=now)

    def logout(self, row: models.Session) -> None:
        self.sessions.revoke(row)

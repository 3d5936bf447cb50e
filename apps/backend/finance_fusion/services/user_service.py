from __future__ import annotations

import logging

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import atomic
from finance_fusion.errors import Conflict, InvalidInput, NotFound, translate_integrity_error
from finance_fusion.security import hash_password

logger = logging.getLogger(__name__)

USERNAME_MAX = 64
# bcrypt only looks at the first 72 bytes
PASSWORD_MAX_BYTES = 72


def _check_password(password: str) -> None:
    if not password:
        raise InvalidInput("Password must not be empty")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise InvalidInput(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")


class UserService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, username: str, password: str, *, is_dev_mode: bool = False) -> models.User:
        username = (username or "").strip()
        if not username or len(username) > USERNAME_MAX:
            raise InvalidInput(f"Username must be 1-{USERNAME_MAX} characters")
        _check_password(password)

        if self.db.query(models.User.id).filter(models.User.username == username).first():
            raise Conflict("Username already exists")

        user = models.User(username=username, pw_hash=hash_password(password), is_dev_mode=is_dev_mode)
        try:
            with atomic(self.db):
                self.db.add(user)
        except IntegrityError as exc:
            logger.error("Error inserting user: %s, error: %s.", username, exc.orig)
            raise translate_integrity_error(exc, "Username already exists") from exc
        self.db.refresh(user)
        return user

    def get(self, user_id: int) -> models.User:
        user = self.db.get(models.User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def get_by_username(self, username: str) -> models.User:
        user = self.db.query(models.User).filter(models.User.username == username).first()
        if user is None:
            raise NotFound("User not found")
        return user

    def update_password(self, user: models.User, password: str) -> models.User:
        _check_password(password)
        with atomic(self.db):
            user.pw_hash = hash_password(password)
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> None:
        """Delete a user and everything they own in one transaction.

        Plans go first so their accounts, budgets, transactions, automations and
        notifications are gone before the user's currencies are removed. The user
        row then cascades to sessions, tags and currencies. If another user's plan
        still references one of this user's currencies nothing is deleted.
        """
        self.get(user_id)
        try:
            with atomic(self.db):
                self.db.execute(delete(models.Plan).where(models.Plan.user_id == user_id))
                self.db.execute(delete(models.User).where(models.User.id == user_id))
        except IntegrityError as exc:
            logger.error("Error deleting user: %s, error: %s.", user_id, exc.orig)
            raise Conflict("User owns a currency that is still in use by another plan") from exc
        logger.info("Deleted user %s", user_id)

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import atomic
from finance_fusion.errors import (
    Conflict,
    Forbidden,
    InvalidInput,
    NotFound,
    ReferenceNotFound,
    translate_integrity_error,
)
from finance_fusion.utils import is_currency_code, normalize_currency_code, normalize_name

logger = logging.getLogger(__name__)


class CurrencyService:
    """Currencies are registered by a user but referenced from any plan by code."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, code: str, name: str, user_id: int) -> models.Currency:
        normalized = normalize_currency_code(code)
        if not is_currency_code(normalized):
            raise InvalidInput("Currency code must be three letters")
        name = normalize_name(name)
        if not name or len(name) > 64:
            raise InvalidInput("Currency name must be 1-64 characters")
        if self.db.get(models.Currency, normalized) is not None:
            raise Conflict(f"Currency {normalized} already exists")

        row = models.Currency(code=normalized, name=name, user_id=user_id)
        try:
            with atomic(self.db):
                self.db.add(row)
        except IntegrityError as exc:
            logger.error("Failed creating currency %s for user %s (%s)", normalized, user_id, exc.orig)
            raise translate_integrity_error(exc, f"Currency {normalized} already exists") from exc
        self.db.refresh(row)
        return row

    def list_all(self) -> list[models.Currency]:
        return self.db.query(models.Currency).order_by(models.Currency.code).all()

    def list_for_user(self, user_id: int) -> list[models.Currency]:
        return (
            self.db.query(models.Currency)
            .filter(models.Currency.user_id == user_id)
            .order_by(models.Currency.code)
            .all()
        )

    def get(self, code: str) -> models.Currency:
        row = self.db.get(models.Currency, normalize_currency_code(code) or "")
        if row is None:
            raise NotFound("Currency not found")
        return row

    def require(self, code: str | None) -> str:
        """Return the canonical code of a registered currency or raise ``ReferenceNotFound``."""
        normalized = normalize_currency_code(code)
        if not normalized or self.db.get(models.Currency, normalized) is None:
            raise ReferenceNotFound(f"Unknown currency {code!r}")
        return normalized

    def delete(self, code: str, user_id: int) -> None:
        row = self.get(code)
        if row.user_id != user_id:
            raise Forbidden("Currency belongs to another user")
        code = row.code
        try:
            with atomic(self.db):
                self.db.delete(row)
        except IntegrityError as exc:
            logger.error("Failed deleting currency %s (%s)", code, exc.orig)
            raise Conflict(f"Currency {code} is in use") from exc

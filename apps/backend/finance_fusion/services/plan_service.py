from __future__ import annotations

import logging

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import atomic
from finance_fusion.errors import Conflict, InvalidInput, NotFound, translate_integrity_error
from finance_fusion.utils import normalize_name

logger = logging.getLogger(__name__)

PLAN_NAME_MAX = 64


class PlanService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, name: str, user_id: int) -> models.Plan:
        """Create a plan. Names are unique across all users, not per user."""
        name = normalize_name(name)
        if not name or len(name) > PLAN_NAME_MAX:
            raise InvalidInput(f"Plan name must be 1-{PLAN_NAME_MAX} characters")
        if self.db.get(models.Plan, name) is not None:
            raise Conflict(f"Plan \"{name}\" already exists")

        row = models.Plan(name=name, user_id=user_id)
        try:
            with atomic(self.db):
                self.db.add(row)
        except IntegrityError as exc:
            logger.error("Failed creating new plan \"%s\" for user %s (%s)", name, user_id, exc.orig)
            raise translate_integrity_error(exc, f"Plan \"{name}\" already exists") from exc
        self.db.refresh(row)
        return row

    def list_for_user(self, user_id: int) -> list[models.Plan]:
        return (
            self.db.query(models.Plan)
            .filter(models.Plan.user_id == user_id)
            .order_by(models.Plan.name)
            .all()
        )

    def get(self, name: str, user_id: int) -> models.Plan:
        """Fetch a plan owned by ``user_id``; other users' plans are reported as missing."""
        row = self.db.get(models.Plan, name)
        if row is None or row.user_id != user_id:
            raise NotFound("Plan not found")
        return row

    def delete(self, name: str, user_id: int) -> bool:
        """Delete a plan and, through the cascades, everything inside it.

        Returns False when no plan of that name belongs to the user.
        """
        with atomic(self.db):
            result = self.db.execute(
                delete(models.Plan).where(models.Plan.name == name, models.Plan.user_id == user_id)
            )
        deleted = (result.rowcount or 0) > 0
        if deleted:
            logger.info("Deleted plan \"%s\" of user %s", name, user_id)
        return deleted

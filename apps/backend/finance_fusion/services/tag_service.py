from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from finance_fusion import models
from finance_fusion.core.database import atomic
from finance_fusion.errors import InvalidInput, NotFound
from finance_fusion.utils import normalize_name

logger = logging.getLogger(__name__)


class TagService:
    """User-owned tags and their many-to-many links to accounts and transactions."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, user_id: int, name: str, icon: str) -> models.Tag:
        name = normalize_name(name)
        if not name or len(name) > 64:
            raise InvalidInput("Tag name must be 1-64 characters")
        if not icon:
            raise InvalidInput("icon is required")
        row = models.Tag(user_id=user_id, name=name, icon=icon)
        with atomic(self.db):
            self.db.add(row)
        self.db.refresh(row)
        return row

    def list_for_user(self, user_id: int) -> list[models.Tag]:
        return self.db.query(models.Tag).filter(models.Tag.user_id == user_id).order_by(models.Tag.id).all()

    def get(self, user_id: int, tag_id: int) -> models.Tag:
        row = self.db.get(models.Tag, tag_id)
        if row is None or row.user_id != user_id:
            raise NotFound("Tag not found")
        return row

    def delete(self, row: models.Tag) -> None:
        with atomic(self.db):
            self.db.delete(row)

    # ---- Links -----------------------------------------------------------
    def tag_account(self, plan: models.Plan, account: models.Account, tag_id: int) -> models.Account:
        tag = self.get(plan.user_id, tag_id)
        if self.db.get(models.AccountTag, (account.id, tag.id)) is None:
            with atomic(self.db):
                self.db.add(models.AccountTag(account_id=account.id, tag_id=tag.id))
        self.db.refresh(account)
        return account

    def untag_account(self, account: models.Account, tag_id: int) -> models.Account:
        link = self.db.get(models.AccountTag, (account.id, tag_id))
        if link is None:
            raise NotFound("Tag is not attached to this account")
        with atomic(self.db):
            self.db.delete(link)
        self.db.refresh(account)
        return account

    def tag_transaction(self, plan: models.Plan, txn: models.Transaction, tag_id: int) -> models.Transaction:
        tag = self.get(plan.user_id, tag_id)
        if self.db.get(models.TransactionTag, (txn.id, tag.id)) is None:
            with atomic(self.db):
                self.db.add(models.TransactionTag(transaction_id=txn.id, tag_id=tag.id))
        self.db.refresh(txn)
        return txn

    def untag_transaction(self, txn: models.Transaction, tag_id: int) -> models.Transaction:
        link = self.db.get(models.TransactionTag, (txn.id, tag_id))
        if link is None:
            raise NotFound("Tag is not attached to this transaction")
        with atomic(self.db):
            self.db.delete(link)
        self.db.refresh(txn)
        return txn

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from .core.database import SessionLocal
from .models import Currency, Plan, User
from .security import hash_password

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo-password"
DEMO_PLAN = "Household"
DEMO_CURRENCIES = (("USD", "US Dollar"), ("EUR", "Euro"))


def seed(db: Session | None = None) -> User:
    """Create a demo user with one plan and a couple of currencies. Safe to rerun."""
    own = db is None
    db = db or SessionLocal()
    try:
        user = db.query(User).filter_by(username=DEMO_USERNAME).first()
        if not user:
            user = User(username=DEMO_USERNAME, pw_hash=hash_password(DEMO_PASSWORD), is_dev_mode=True)
            db.add(user)
            db.flush()

        for code, name in DEMO_CURRENCIES:
            if db.get(Currency, code) is None:
                db.add(Currency(code=code, name=name, user_id=user.id))

        if db.get(Plan, DEMO_PLAN) is None:
            db.add(Plan(name=DEMO_PLAN, user_id=user.id))

        db.commit()
        db.refresh(user)
        logger.info("Seeded demo user %s", user.id)
        return user
    except Exception:
        db.rollback()
        raise
    finally:
        if own:
            db.close()


if __name__ == "__main__":
    seed()

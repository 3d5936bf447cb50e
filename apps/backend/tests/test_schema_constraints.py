"""Constraints enforced by the database itself, exercised with raw ORM inserts."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError

from finance_fusion import models
from finance_fusion.errors import Conflict
from finance_fusion.services import AccountService, PlanService, TagService, UserService


def _count(db, model, *where):
    return db.scalar(select(func.count()).select_from(model).where(*where))


def test_duplicate_username_violates_unique(db_session):
    db_session.add(models.User(username="dup", pw_hash="x"))
    db_session.commit()
    db_session.add(models.User(username="dup", pw_hash="y"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_plan_name_unique_across_users(db_session, alice, bob):
    db_session.add(models.Plan(name="shared", user_id=alice.id))
    db_session.commit()
    with pytest.raises(IntegrityError):
        db_session.execute(insert(models.Plan).values(name="shared", user_id=bob.id))
        db_session.commit()
    db_session.rollback()


def test_plan_service_reports_conflict_for_other_users_name(db_session, alice, bob):
    PlanService(db_session).create("shared", alice.id)
    with pytest.raises(Conflict):
        PlanService(db_session).create("shared", bob.id)


@pytest.mark.parametrize("factory", [
    lambda plan: models.Account(plan_name=plan, name="Checking", currency="XXX"),
    lambda plan: models.Budget(
        plan_name=plan, name="Food", amount=Decimal("10"), interval="monthly",
        currency="XXX", start_date=date(2026, 1, 1),
    ),
    lambda plan: models.Transaction(plan_name=plan, type="expense", amount=Decimal("1"), currency="XXX"),
    lambda plan: models.Automation(
        plan_name=plan, name="Rent", type="expense", amount=Decimal("1"), currency="XXX",
        frequency="monthly", start_date=date(2026, 1, 1),
    ),
])
def test_unknown_currency_violates_foreign_key(db_session, alice_plan, factory):
    db_session.add(factory(alice_plan.name))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_invalid_login_attempts_check_constraint(db_session):
    db_session.add(models.User(username="neg", pw_hash="x", invalid_login_attempts=-1))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

    db_session.add(models.User(username="zero", pw_hash="x", invalid_login_attempts=0))
    db_session.commit()
    assert _count(db_session, models.User, models.User.username == "zero") == 1


def test_user_defaults_applied_by_database(db_session):
    db_session.add(models.User(username="fresh", pw_hash="x"))
    db_session.commit()
    user = db_session.query(models.User).filter_by(username="fresh").one()
    assert user.is_dev_mode is False
    assert user.invalid_login_attempts == 0
    assert (user.lock_duration_s, user.lock_duration_factor, user.lock_duration_cap_s) == (60, 2, 3600)
    assert user.locked_until is None
    assert user.created_at is not None


def test_alice_scenario_leaves_no_rows(db_session, alice, usd, alice_plan):
    account = AccountService(db_session).create(
        alice_plan, {"name": "Checking", "currency": "USD", "balance": "100.00"}
    )
    assert account.balance == Decimal("100.00")
    user_id, plan_name = alice.id, alice_plan.name

    UserService(db_session).delete(user_id)

    assert _count(db_session, models.User, models.User.id == user_id) == 0
    assert _count(db_session, models.Plan, models.Plan.user_id == user_id) == 0
    assert _count(db_session, models.Account, models.Account.plan_name == plan_name) == 0
    assert _count(db_session, models.Currency, models.Currency.user_id == user_id) == 0


def test_user_delete_cascades_through_plans_and_links(db_session, alice, usd, alice_plan):
    accounts = AccountService(db_session)
    checking = accounts.create(alice_plan, {"name": "Checking", "currency": "USD"})
    savings = accounts.create(alice_plan, {"name": "Savings", "currency": "USD"})
    db_session.add_all([
        models.Session(user_id=alice.id, expires_at=models.utcnow_naive() + timedelta(hours=1)),
        models.Notification(plan_name=alice_plan.name, title="Hi", body="there"),
        models.Budget(
            plan_name=alice_plan.name, name="Food", amount=Decimal("200"), interval="monthly",
            currency="USD", start_date=date(2026, 1, 1),
        ),
        models.Automation(
            plan_name=alice_plan.name, name="Save", type="transfer", from_account=checking.id,
            to_account=savings.id, amount=Decimal("50"), currency="USD", frequency="monthly",
            start_date=date(2026, 1, 1),
        ),
    ])
    txn = models.Transaction(
        plan_name=alice_plan.name, type="transfer", from_account=checking.id, to_account=savings.id,
        amount=Decimal("25"), currency="USD",
    )
    db_session.add(txn)
    db_session.commit()
    tags = TagService(db_session)
    tag = tags.create(alice.id, "rainy day", "umbrella")
    tags.tag_account(alice_plan, savings, tag.id)
    tags.tag_transaction(alice_plan, txn, tag.id)

    UserService(db_session).delete(alice.id)

    for model in (
        models.Session, models.Plan, models.Tag, models.Currency, models.Notification, models.Account,
        models.Budget, models.Transaction, models.Automation, models.AccountTag, models.TransactionTag,
    ):
        assert _count(db_session, model) == 0, model.__tablename__


def test_user_delete_is_atomic_when_currency_used_elsewhere(db_session, alice, bob, usd, alice_plan):
    bob_plan = PlanService(db_session).create("bob-budget", bob.id)
    AccountService(db_session).create(bob_plan, {"name": "Wallet", "currency": "USD"})

    with pytest.raises(Conflict):
        UserService(db_session).delete(alice.id)

    assert _count(db_session, models.User, models.User.id == alice.id) == 1
    assert _count(db_session, models.Plan, models.Plan.name == alice_plan.name) == 1
    assert _count(db_session, models.Currency, models.Currency.code == "USD") == 1


def test_deleting_account_removes_its_transactions(db_session, usd, alice_plan):
    accounts = AccountService(db_session)
    checking = accounts.create(alice_plan, {"name": "Checking", "currency": "USD"})
    db_session.add(models.Transaction(
        plan_name=alice_plan.name, type="expense", from_account=checking.id,
        amount=Decimal("3.50"), currency="USD",
    ))
    db_session.commit()

    accounts.delete(alice_plan, checking)

    assert _count(db_session, models.Transaction) == 0

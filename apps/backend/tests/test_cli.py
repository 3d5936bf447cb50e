from datetime import timedelta

import pytest

from finance_fusion import __version__, models
from finance_fusion.cli import build_parser, main
from finance_fusion.seed import DEMO_PLAN, DEMO_USERNAME, seed
from finance_fusion.services import SessionService


def test_serve_defaults():
    args = build_parser().parse_args(["serve"])
    assert args.host == "0.0.0.0"
    assert args.port == 5000

    args = build_parser().parse_args(["serve", "--host", "127.0.0.1", "--port", "8080"])
    assert (args.host, args.port) == ("127.0.0.1", 8080)


def test_version(capsys):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--version"])
    assert __version__ in capsys.readouterr().out


def test_command_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_init_db_and_purge_sessions(db_session, alice, capsys):
    assert main(["init-db"]) == 0

    svc = SessionService(db_session, ttl=timedelta(hours=1))
    svc.create(alice.id, now=models.utcnow_naive() - timedelta(hours=2))
    assert main(["purge-sessions"]) == 0
    assert capsys.readouterr().out.strip().endswith("1")
    assert db_session.query(models.Session).count() == 0


def test_seed_is_idempotent(db_session):
    user = seed(db_session)
    again = seed(db_session)
    assert user.id == again.id
    assert user.username == DEMO_USERNAME
    assert db_session.get(models.Plan, DEMO_PLAN).user_id == user.id
    assert {c.code for c in db_session.query(models.Currency).all()} == {"USD", "EUR"}

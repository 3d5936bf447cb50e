from __future__ import annotations

import os
import tempfile
from typing import Any, Generator

# Cheap hashing and a fixed signing key for the whole test run; must precede package imports
os.environ.setdefault("FUSION_BCRYPT_ROUNDS", "4")
os.environ.setdefault("FUSION_JWT_SECRET", "test-secret")
os.environ.setdefault("FUSION_LOG_LEVEL", "WARNING")
# TestClient talks plain http, where a Secure cookie would not be sent back
os.environ.setdefault("FUSION_COOKIE_SECURE", "false")
_fd, _DB_PATH = tempfile.mkstemp(prefix="fusion_test_", suffix=".sqlite3")
os.close(_fd)
os.environ["FUSION_DATABASE_URL"] = f"sqlite:///{_DB_PATH}"

import pytest
from sqlalchemy.orm import sessionmaker

from finance_fusion.core.database import Base, build_engine, get_db
from finance_fusion.main import app
from finance_fusion.services import CurrencyService, PlanService, UserService


@pytest.fixture(scope="session")
def test_db_url() -> Generator[str, Any, Any]:
    # temp file SQLite shared with the app engine so the developer database is never touched
    yield os.environ["FUSION_DATABASE_URL"]
    try:
        os.remove(_DB_PATH)
    except OSError:
        pass


@pytest.fixture(scope="session")
def engine(test_db_url: str):
    eng = build_engine(test_db_url)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Any, Any, Any]:
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # children first so foreign keys stay satisfied
        with engine.begin() as conn:
            for tbl in reversed(Base.metadata.sorted_tables):
                conn.execute(tbl.delete())


@pytest.fixture(autouse=True)
def override_dependency(db_session):
    def _get_db_override():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db_override
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client(db_session):
    from fastapi.testclient import TestClient
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def alice(db_session):
    return UserService(db_session).create("alice", "alice-password")


@pytest.fixture()
def bob(db_session):
    return UserService(db_session).create("bob", "bob-password")


@pytest.fixture()
def usd(db_session, alice):
    return CurrencyService(db_session).create("USD", "US Dollar", alice.id)


@pytest.fixture()
def alice_plan(db_session, alice):
    return PlanService(db_session).create("alice-budget", alice.id)


def login(client, username: str, password: str) -> dict[str, str]:
    """Log in and return a Bearer header. The cookie jar is cleared so several users can share one client."""
    r = client.post("/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture()
def signup(client):
    def _signup(username: str, password: str = "secret-pw") -> dict[str, str]:
        r = client.post("/users", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        return login(client, username, password)

    return _signup


@pytest.fixture()
def login_as(client):
    return lambda username, password: login(client, username, password)

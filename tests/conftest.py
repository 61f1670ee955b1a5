"""Pytest configuration and shared fixtures for FinBoard tests.

This module provides database fixtures, gateway/test data factories and a Flask
client fixture so domain logic, repositories and routes can be exercised
without touching a real data directory.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from finboard import create_app
from finboard.config import TestConfig
from finboard.constants import COMPLETED, EXPENSE
from finboard.infra.database import create_session_factory, init_database
from finboard.infra.gateway import build_sqlmodel_gateway_factory
from finboard.models import Category, Transaction
from sqlmodel import create_engine

TEST_EMAIL = "tester@example.com"
TEST_PASSWORD = "s3cret-pass"


# =============================================================================
# Configuration & Database Fixtures
# =============================================================================


@pytest.fixture
def test_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point every FinBoard setting at a throwaway directory."""

    monkeypatch.setenv("FINBOARD_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.setenv("FINBOARD_DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setenv("FINBOARD_GATEWAY", "sqlmodel")
    monkeypatch.delenv("FINBOARD_LOCALE", raising=False)
    monkeypatch.delenv("FINBOARD_MONTHLY_SERIES_ORDER", raising=False)
    monkeypatch.delenv("FINBOARD_ENFORCE_CATEGORY_KIND", raising=False)
    return tmp_path


@pytest.fixture
def config(test_env) -> TestConfig:
    return TestConfig()


@pytest.fixture
def db_engine(tmp_path):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with every table created
    """

    engine = create_engine(
        f"sqlite:///{tmp_path / 'repo.db'}", connect_args={"check_same_thread": False}
    )
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Transactional session scopes bound to the test engine."""

    return create_session_factory(db_engine)


@pytest.fixture
def gateway(config, session_factory):
    """Embedded gateway over the test database."""

    return build_sqlmodel_gateway_factory(config, session_factory)(None)


@pytest.fixture
def identity(gateway):
    """A registered and signed-in user."""

    return gateway.auth.sign_up(TEST_EMAIL, TEST_PASSWORD)


@pytest.fixture
def user_id(identity) -> str:
    return identity.user_id


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def category_factory(gateway, user_id):
    """Factory for creating categories through the gateway."""

    def _create_category(
        name: str = "Groceries", kind: str = EXPENSE, color: str = "#F59E0B", owner: str | None = None
    ) -> Category:
        owner = owner or user_id
        return gateway.categories.create(
            Category(user_id=owner, name=name, kind=kind, color=color), user_id=owner
        )

    return _create_category


@pytest.fixture
def transaction_factory(gateway, user_id):
    """Factory for creating transactions through the gateway.

    Amounts are non-negative; ``kind`` carries the direction.
    """

    def _create_transaction(
        amount: str | Decimal = "10.00",
        kind: str = EXPENSE,
        occurred_on: date | None = None,
        description: str = "Test transaction",
        category_id: str | None = None,
        status: str = COMPLETED,
        owner: str | None = None,
    ) -> Transaction:
        owner = owner or user_id
        return gateway.transactions.create(
            Transaction(
                user_id=owner,
                amount=Decimal(str(amount)),
                kind=kind,
                occurred_on=occurred_on or date.today(),
                description=description,
                category_id=category_id,
                status=status,
            ),
            user_id=owner,
        )

    return _create_transaction


@pytest.fixture
def make_txn():
    """Plain transaction stand-ins for the pure aggregation/filter functions."""

    def _make(kind: str, amount, occurred_on: date = date(2024, 1, 15), category: str | None = None, **extra):
        return SimpleNamespace(
            kind=kind,
            amount=Decimal(str(amount)),
            occurred_on=occurred_on,
            category=SimpleNamespace(name=category) if category else None,
            **extra,
        )

    return _make


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(test_env):
    app = create_app("testing")
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_client(client):
    """A client whose cookie session holds a fresh account's token."""

    response = client.post("/auth/signup", data={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert response.status_code == 302
    return client


@pytest.fixture
def app_gateway(app):
    """The gateway the app itself uses, for seeding and asserting state."""

    return app.extensions["finboard"].gateway()


@pytest.fixture
def app_user_id(app_gateway, auth_client) -> str:
    return app_gateway.auth.sign_in(TEST_EMAIL, TEST_PASSWORD).user_id

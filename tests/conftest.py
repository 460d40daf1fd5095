import logging

import pytest
from fastapi.testclient import TestClient

from portfolio_api.app.core.config import settings
from portfolio_api.app.core.db import DocumentStore
from portfolio_api.app.main import create_app
from tests.fakes import FakeClient

TEST_SECRET = "test-secret"


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Pin the settings the services read at call time."""
    monkeypatch.setattr(settings, "jwt_secret", TEST_SECRET)
    monkeypatch.setattr(settings, "jwt_algorithm", "HS256")
    monkeypatch.setattr(settings, "expires_in", "1h")
    monkeypatch.setattr(settings, "bcrypt_rounds", 10)
    monkeypatch.setattr(settings, "expose_password_hash", False)
    monkeypatch.setattr(settings, "debug", False)
    return settings


@pytest.fixture(autouse=True)
def configure_logging_for_tests(caplog):
    caplog.set_level(logging.INFO, logger="portfolio_api")


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore(FakeClient(), "portfolio_test")


@pytest.fixture
def client(store):
    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client

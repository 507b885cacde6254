"""Shared pytest fixtures for the marketplace stores and API."""

from __future__ import annotations

import sys
from pathlib import Path

import mongomock
import pytest

# Ensure the application package is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from offerboard import database  # noqa: E402
from offerboard.main import create_app  # noqa: E402
from offerboard.marketplace import Marketplace  # noqa: E402
from offerboard.models import AccountFields  # noqa: E402
from offerboard.settings import Settings  # noqa: E402
from offerboard.storage import KV_COLLECTION, MongoKeyValueStore  # noqa: E402


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch: pytest.MonkeyPatch):
    """Provide an isolated in-memory MongoDB database for each test."""
    test_db_name = "test_offerboard"
    monkeypatch.setenv("ENABLE_MONGODB", "true")
    monkeypatch.setenv("MONGODB_DATABASE", test_db_name)

    client = mongomock.MongoClient()
    db = client[test_db_name]

    monkeypatch.setattr(database, "get_mongo_client", lambda: client)
    monkeypatch.setattr(database, "get_database", lambda: db)

    yield db

    client.drop_database(test_db_name)


@pytest.fixture
def kv(mongo_db):
    return MongoKeyValueStore(mongo_db[KV_COLLECTION])


@pytest.fixture
def marketplace(kv):
    return Marketplace(kv, Settings(enable_mongodb=True))


@pytest.fixture
def app(kv):
    flask_app = create_app(Settings(enable_mongodb=True), kv_store=kv)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


def male_fields(username: str, password: str = "secret", name: str = "") -> AccountFields:
    return AccountFields(
        username=username,
        password=password,
        name=name or username.title(),
        gender="male",
        age="30",
    )


def female_fields(username: str, password: str = "secret", name: str = "") -> AccountFields:
    return AccountFields(
        username=username,
        password=password,
        name=name or username.title(),
        gender="female",
        age="28",
        bust="34",
        waist="26",
        hips="36",
        bra_size="34B",
    )

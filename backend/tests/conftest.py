"""Pytest configuration and fixtures."""
import os
from typing import Callable, Dict, Generator

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from benchmap.core.config import settings
from benchmap.core.database import Base, engine_options, get_db
from benchmap.db import models  # noqa: F401
from benchmap.main import app

# SQLite in memory by default; set TEST_DATABASE_URL to run against PostgreSQL
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")

engine = create_engine(TEST_DATABASE_URL, **engine_options(TEST_DATABASE_URL))
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_token(user_id: str) -> str:
    return jwt.encode({"sub": user_id}, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


@pytest.fixture
def auth() -> Callable[[str], Dict[str, str]]:
    """Build Authorization headers for a user id."""

    def _headers(user_id: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id)}"}

    return _headers


@pytest.fixture
def create_bench(client, auth) -> Callable[..., dict]:
    """Create a bench through the API and return its JSON."""

    def _create(owner: str = "owner", **overrides) -> dict:
        payload = {
            "title": "Bench by the lake",
            "description": "Quiet spot",
            "lat": 55.75,
            "lng": 37.61,
            "category": "forest",
            "ratings": {"accessibility": 4, "crowd": 2, "view": 5, "vibe": 4},
        }
        payload.update(overrides)
        response = client.post("/entities", json=payload, headers=auth(owner))
        assert response.status_code == 201, response.text
        return response.json()

    return _create

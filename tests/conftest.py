"""Shared fixtures for the API tests.

The application reads its settings at import time, so the environment is
prepared before anything from ``feedback_app`` is imported: an in-memory
SQLite database, no log files, and cheap bcrypt hashing.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_TO_FILE"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from feedback_app.config.database_config import Base, engine
from feedback_app.main import app


@pytest.fixture
def client():
    """Test client over a fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client
    Base.metadata.drop_all(bind=engine)


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, email="admin@example.com", password="secret1", name="Admin"):
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.json()
    return response.json()["data"]


SAMPLE_QUESTIONS = [
    {"id": "q1", "type": "text", "questionText": "Q1", "required": True},
    {
        "id": "q2",
        "type": "multiple-choice",
        "questionText": "Q2",
        "options": ["A", "B", "C"],
        "required": False,
    },
]


def create_form(client, token, title="Team Feedback", questions=None, **extra):
    body = {"title": title, "questions": SAMPLE_QUESTIONS if questions is None else questions}
    body.update(extra)
    response = client.post("/api/forms", json=body, headers=auth_headers(token))
    assert response.status_code == 201, response.json()
    return response.json()["data"]


@pytest.fixture
def admin(client):
    return register(client)


@pytest.fixture
def form(client, admin):
    return create_form(client, admin["token"])

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory user/job services so no MongoDB is needed
# - A fresh AppContext (and rate-limit store) per test
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.main, which builds the module-level app

os.environ.setdefault("MONGO_URI", "mongodb://127.0.0.1:27017/jobs-api-test")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789")
os.environ.setdefault("JWT_LIFETIME", "1d")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from datetime import datetime, timezone
from typing import Any

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.auth.tokens import create_token
from app.config import Settings
from app.dependencies import AppContext, load_swagger_document
from app.exceptions import (
    BadRequestError,
    DuplicateValueError,
    InvalidIdError,
    JobNotFoundError,
    UnauthenticatedError,
)
from app.main import create_app
from app.middleware.rate_limit import RateLimitStore
from core.models.job import JobCreate, JobUpdate
from lib.mongo_client import Database


# =============================================================================
# In-memory services
# =============================================================================

class FakeUserService:
    """Stores users in a dict keyed by e-mail. Passwords are kept in clear."""

    def __init__(self):
        self.users: dict[str, dict[str, Any]] = {}

    async def ensure_indexes(self) -> None:
        pass

    async def create_user(self, name: str, email: str, password: str) -> dict[str, Any]:
        email = email.lower()
        if email in self.users:
            raise DuplicateValueError("email")
        user = {"_id": str(ObjectId()), "name": name, "email": email, "password": password}
        self.users[email] = user
        return {k: v for k, v in user.items() if k != "password"}

    async def authenticate(self, email: str | None, password: str | None) -> dict[str, Any]:
        if not email or not password:
            raise BadRequestError("Please provide email and password", code="MISSING_CREDENTIALS")
        user = self.users.get(email.lower())
        if user is None or user["password"] != password:
            raise UnauthenticatedError("Invalid Credentials")
        return {k: v for k, v in user.items() if k != "password"}


class FakeJobService:
    """Stores jobs in a dict and records every call."""

    def __init__(self):
        self.jobs: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []

    async def ensure_indexes(self) -> None:
        pass

    def _owned(self, user_id: str, job_id: str) -> dict[str, Any]:
        if not ObjectId.is_valid(job_id):
            raise InvalidIdError(job_id)
        job = self.jobs.get(job_id)
        if job is None or job["createdBy"] != user_id:
            raise JobNotFoundError(job_id)
        return job

    async def list_jobs(self, user_id: str) -> list[dict[str, Any]]:
        self.calls.append("list_jobs")
        owned = [job for job in self.jobs.values() if job["createdBy"] == user_id]
        return sorted(owned, key=lambda job: job["createdAt"], reverse=True)

    async def create_job(self, user_id: str, data: JobCreate) -> dict[str, Any]:
        self.calls.append("create_job")
        now = datetime.now(timezone.utc)
        job = {
            "_id": str(ObjectId()),
            "company": data.company,
            "position": data.position,
            "status": data.status.value,
            "createdBy": user_id,
            "createdAt": now,
            "updatedAt": now,
        }
        self.jobs[job["_id"]] = job
        return job

    async def get_job(self, user_id: str, job_id: str) -> dict[str, Any]:
        self.calls.append("get_job")
        return self._owned(user_id, job_id)

    async def update_job(self, user_id: str, job_id: str, data: JobUpdate) -> dict[str, Any]:
        self.calls.append("update_job")
        if not data.company or not data.position:
            raise BadRequestError("Company or Position fields cannot be empty", code="EMPTY_JOB_FIELDS")
        job = self._owned(user_id, job_id)
        job.update(data.model_dump(exclude_none=True, mode="json"))
        job["updatedAt"] = datetime.now(timezone.utc)
        return job

    async def delete_job(self, user_id: str, job_id: str) -> None:
        self.calls.append("delete_job")
        self._owned(user_id, job_id)
        del self.jobs[job_id]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings built from the test environment."""
    return Settings()


@pytest.fixture
def context(settings):
    """A fresh AppContext backed by in-memory services."""
    return AppContext(
        settings=settings,
        database=Database(),
        rate_limits=RateLimitStore(
            window_seconds=settings.rate_limit_window_seconds,
            max_requests=settings.RATE_LIMIT_MAX,
        ),
        users=FakeUserService(),
        jobs=FakeJobService(),
        swagger_doc=load_swagger_document(settings.SWAGGER_FILE),
    )


@pytest.fixture
def app(context):
    return create_app(context)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def user_id():
    return str(ObjectId())


@pytest.fixture
def token(settings, user_id):
    """A valid bearer token for user_id."""
    return create_token(user_id, "Jane", settings)


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}

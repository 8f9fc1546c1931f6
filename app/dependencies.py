# =============================================================================
# app/dependencies.py - Application Context and Shared Dependencies
# =============================================================================
# The AppContext is built once by the composer and stored on app.state.
# Route handlers receive it (or pieces of it) through Depends(), never
# through module globals.
# =============================================================================

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any

import yaml
from fastapi import Depends, Request

from app.config import Settings
from app.middleware.rate_limit import RateLimitStore
from core.services import JobService, UserService
from lib.mongo_client import Database


def load_swagger_document(path: str | Path) -> dict[str, Any]:
    """Load the bundled OpenAPI document once at startup."""
    path = Path(path)
    if not path.is_absolute() and not path.exists():
        # Fall back to the copy shipped next to the package
        path = Path(__file__).resolve().parent.parent / path
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass
class AppContext:
    """
    Process-wide state shared by every request.

    Attributes:
        settings: Validated configuration
        database: The single MongoDB handle
        rate_limits: Per-client request counters
        users: User registration/login service
        jobs: Job CRUD service
        swagger_doc: OpenAPI document served at /api-docs
    """

    settings: Settings
    database: Database
    rate_limits: RateLimitStore
    users: Any
    jobs: Any
    swagger_doc: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        """Build the production context. The database is not connected yet."""
        database = Database(
            db_name=settings.MONGO_DB_NAME,
            timeout_ms=settings.MONGO_TIMEOUT_MS,
        )
        return cls(
            settings=settings,
            database=database,
            rate_limits=RateLimitStore(
                window_seconds=settings.rate_limit_window_seconds,
                max_requests=settings.RATE_LIMIT_MAX,
            ),
            users=UserService(database),
            jobs=JobService(database),
            swagger_doc=load_swagger_document(settings.SWAGGER_FILE),
        )


def get_context(request: Request) -> AppContext:
    """Return the AppContext the composer attached to the application."""
    return request.app.state.context


def get_settings_dep(context: Annotated[AppContext, Depends(get_context)]) -> Settings:
    return context.settings


def get_user_service(context: Annotated[AppContext, Depends(get_context)]) -> UserService:
    return context.users


def get_job_service(context: Annotated[AppContext, Depends(get_context)]) -> JobService:
    return context.jobs


# Type aliases for dependency injection
ContextDep = Annotated[AppContext, Depends(get_context)]
SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
JobServiceDep = Annotated[JobService, Depends(get_job_service)]

# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Registration, login and token response schemas
# - job.py: Job create/update/response schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models - Registration and login
# -----------------------------------------------------------------------------
from .user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserSummary,
)

# -----------------------------------------------------------------------------
# Job Models - Job application tracking
# -----------------------------------------------------------------------------
from .job import (
    JobCreate,
    JobList,
    JobResponse,
    JobEnvelope,
    JobStatus,
    JobUpdate,
)

__all__ = [
    # User
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "UserSummary",
    # Job
    "JobCreate",
    "JobList",
    "JobResponse",
    "JobEnvelope",
    "JobStatus",
    "JobUpdate",
]

# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .job_service import JobService

__all__ = [
    "UserService",
    "JobService",
]

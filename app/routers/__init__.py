# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - docs.py: Landing page and Swagger UI for the bundled API document
# - jobs.py: Job CRUD endpoints (protected)
#
# Authentication routes live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import docs
from . import jobs

__all__ = [
    "docs",
    "jobs",
]

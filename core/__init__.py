# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain logic of the Jobs API:
# - models/: Pydantic schemas for users and jobs
# - services/: MongoDB-backed user and job services
#
# Routes and request handling live in app/. Services import only the
# error classes from app.exceptions; the registered handlers turn those
# into responses.
# =============================================================================

# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Jobs API:
# - test_app.py: Pipeline order, docs, fallbacks, headers
# - test_auth.py: Tokens, register/login, the jobs guard
# - test_jobs.py: Jobs CRUD through the full pipeline
# - test_rate_limit.py: Rate limiter and trusted proxy
# - test_sanitize.py: Body parser and sanitizer
# - test_services.py: Mongo-backed services with mocked collections
# - test_startup.py: Connect-then-listen startup sequence
# - test_config.py / test_models.py: Settings and schema validation
#
# Run tests with: pytest
# =============================================================================

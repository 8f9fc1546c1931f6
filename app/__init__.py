# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the web application:
# - main.py: App composer, request pipeline order, process entry point
# - config.py: Environment variable loading and settings
# - dependencies.py: AppContext and dependency-injection helpers
# - exceptions.py: Error hierarchy and the centralized handlers
# - auth/: Bearer-token authentication and the register/login routes
# - middleware/: Pipeline stages (proxy, rate limit, body, headers, sanitize)
# - routers/: Jobs CRUD and documentation endpoints
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================

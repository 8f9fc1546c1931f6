# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Jobs API.
# create_app() assembles the request pipeline in a fixed order; start()
# connects to MongoDB and only then binds the HTTP listener.
#
# Usage:
#   jobs-api                      # console script, same as python -m app.main
#   uvicorn app.main:app --reload # development, database connects lazily
# =============================================================================

import asyncio
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware import Middleware

from app.auth import authenticate_user
from app.auth import routes as auth_routes
from app.config import get_settings
from app.dependencies import AppContext
from app.exceptions import (
    JobsApiException,
    http_exception_handler,
    jobs_api_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.middleware import (
    JSONBodyParserMiddleware,
    RateLimitMiddleware,
    SanitizeMiddleware,
    SecurityHeadersMiddleware,
    TrustProxyMiddleware,
)
from app.routers import docs, jobs
from lib.mongo_client import DatabaseConnectionError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_settings().DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_pipeline(context: AppContext) -> list[Middleware]:
    """
    The request pipeline, outermost stage first.

    Order matters: the client address is resolved before rate limiting,
    and bodies are parsed before they are sanitized. Nothing after the
    sanitizer sees raw input.
    """
    settings = context.settings
    return [
        Middleware(TrustProxyMiddleware, trusted_hops=settings.TRUST_PROXY_HOPS),
        Middleware(RateLimitMiddleware, store=context.rate_limits),
        Middleware(JSONBodyParserMiddleware, max_size=settings.body_limit_bytes),
        Middleware(SecurityHeadersMiddleware, docs_paths=[docs.DOCS_PATH]),
        Middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins_list,
            allow_credentials="*" not in settings.cors_origins_list,
            allow_methods=["*"],
            allow_headers=["*"],
        ),
        Middleware(SanitizeMiddleware),
    ]


def create_app(context: AppContext | None = None) -> FastAPI:
    """
    Assemble the application.

    Args:
        context: Shared state; built from environment settings when omitted

    Returns:
        FastAPI application with the context on app.state.context
    """
    if context is None:
        context = AppContext.from_settings(get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: create indexes if the database is already connected
        - Shutdown: close the database connection
        """
        logger.info(f"Starting Jobs API in {context.settings.ENVIRONMENT} mode")
        logger.info(f"CORS origins: {context.settings.cors_origins_list}")
        if context.database.is_connected:
            await context.users.ensure_indexes()
            await context.jobs.ensure_indexes()

        yield

        logger.info("Shutting down Jobs API")
        context.database.close()

    app = FastAPI(
        title=context.swagger_doc.get("info", {}).get("title", "Jobs API"),
        version=context.swagger_doc.get("info", {}).get("version", "1.0.0"),
        # /api-docs is served from the bundled document instead
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
        middleware=build_pipeline(context),
    )
    app.state.context = context

    # Routers
    app.include_router(
        auth_routes.router,
        prefix="/api/v1/auth",
        tags=["Auth"]
    )
    app.include_router(
        jobs.router,
        prefix="/api/v1/jobs",
        tags=["Jobs"],
        dependencies=[Depends(authenticate_user)],
    )
    app.include_router(docs.router)

    # Fallback handlers
    app.add_exception_handler(JobsApiException, jobs_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    return app


app = create_app()


async def start(application: FastAPI | None = None) -> bool:
    """
    Connect to MongoDB, then serve.

    Returns:
        False if the database could not be reached (the listener is never
        bound); True once the server has shut down normally.
    """
    application = application or app
    context: AppContext = application.state.context
    settings = context.settings

    try:
        await context.database.connect(settings.MONGO_URI)
    except DatabaseConnectionError as e:
        logger.error(f"Server not started: {e}")
        return False

    config = uvicorn.Config(
        application,
        host=settings.API_HOST,
        port=settings.PORT,
        server_header=False,
        log_level="debug" if settings.DEBUG else "info",
    )
    server = uvicorn.Server(config)

    serve_task = asyncio.create_task(server.serve())
    while not server.started and not serve_task.done():
        await asyncio.sleep(0.05)
    if server.started:
        logger.info(f"Server is listening on port {settings.PORT}...")

    await serve_task
    return True


def main() -> int:
    """Process entry point."""
    started = asyncio.run(start())
    return 0 if started else 1


if __name__ == "__main__":
    sys.exit(main())

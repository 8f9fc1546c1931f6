# =============================================================================
# tests/test_app.py - Application Composition Tests
# =============================================================================
# Tests for the assembled application:
# - Pipeline order
# - Landing page and documentation endpoints
# - Not-found and error fallbacks
# - Security and CORS headers
#
# Run with: pytest tests/test_app.py -v
# =============================================================================

from fastapi import APIRouter
from fastapi.middleware.cors import CORSMiddleware
from fastapi.testclient import TestClient

from app.main import build_pipeline, create_app
from app.middleware import (
    JSONBodyParserMiddleware,
    RateLimitMiddleware,
    SanitizeMiddleware,
    SecurityHeadersMiddleware,
    TrustProxyMiddleware,
)
from app.middleware.security_headers import DEFAULT_CSP, DOCS_CSP
from app.routers.docs import DOCS_PATH


# =============================================================================
# Pipeline
# =============================================================================

class TestPipeline:
    """Tests for the middleware order."""

    def test_pipeline_order(self, context):
        """Stages run in the documented order, outermost first."""
        stages = [entry.cls for entry in build_pipeline(context)]

        assert stages == [
            TrustProxyMiddleware,
            RateLimitMiddleware,
            JSONBodyParserMiddleware,
            SecurityHeadersMiddleware,
            CORSMiddleware,
            SanitizeMiddleware,
        ]

    def test_rate_limiter_uses_context_store(self, context):
        """The limiter shares the store held by the AppContext."""
        rate_limit = build_pipeline(context)[1]
        assert rate_limit.kwargs["store"] is context.rate_limits

    def test_context_attached_to_app(self, app, context):
        assert app.state.context is context


# =============================================================================
# Landing Page and Docs
# =============================================================================

class TestRootAndDocs:
    """Tests for / and /api-docs."""

    def test_root_returns_html(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "Jobs API" in response.text
        assert "./api-docs" in response.text

    def test_api_docs_returns_swagger_ui(self, client):
        response = client.get("/api-docs")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "swagger-ui" in response.text
        assert "/api-docs/swagger.json" in response.text

    def test_swagger_document_served_as_json(self, client):
        response = client.get("/api-docs/swagger.json")

        assert response.status_code == 200
        document = response.json()
        assert document["info"]["title"] == "Jobs API"
        assert "/jobs" in document["paths"]

    def test_docs_get_relaxed_csp(self, client):
        """Swagger UI assets come from the CDN, so docs get their own policy."""
        docs = client.get("/api-docs")
        root = client.get("/")

        assert "cdn.jsdelivr.net" in docs.headers["content-security-policy"]
        assert "cdn.jsdelivr.net" not in root.headers["content-security-policy"]

    def test_builtin_openapi_routes_disabled(self, client):
        assert client.get("/docs").status_code == 404
        assert client.get("/openapi.json").status_code == 404


# =============================================================================
# Fallback Handlers
# =============================================================================

class TestFallbacks:
    """Tests for the not-found and error handlers."""

    def test_unknown_path_returns_not_found_payload(self, client):
        response = client.get("/definitely/not/here")

        assert response.status_code == 404
        body = response.json()
        assert body["detail"] == "Route does not exist"
        assert body["code"] == "ROUTE_NOT_FOUND"

    def test_unknown_api_path_returns_not_found_payload(self, client, auth_headers):
        response = client.post("/api/v1/unknown", json={}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "ROUTE_NOT_FOUND"

    def test_wrong_method_uses_uniform_payload(self, client):
        response = client.put("/")

        assert response.status_code == 405
        assert response.json()["code"] == "HTTP_405"

    def test_unexpected_error_returns_500_payload(self, context):
        """Any uncaught error ends in the centralized handler."""
        app = create_app(context)
        router = APIRouter()

        @router.get("/boom")
        async def boom():
            raise RuntimeError("kaboom")

        app.include_router(router)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "detail": "Something went wrong, try again later",
            "code": "INTERNAL_ERROR",
        }


# =============================================================================
# Headers
# =============================================================================

class TestHeaders:
    """Tests for security and CORS headers."""

    def test_security_headers_added(self, client):
        response = client.get("/")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "SAMEORIGIN"
        assert response.headers["referrer-policy"] == "no-referrer"
        assert response.headers["x-xss-protection"] == "0"
        assert "default-src 'self'" in response.headers["content-security-policy"]

    def test_security_headers_configured_by_docs_paths(self, context):
        """The docs prefix is the only thing the pipeline configures."""
        entry = build_pipeline(context)[3]
        assert entry.kwargs == {"docs_paths": [DOCS_PATH]}

        middleware = SecurityHeadersMiddleware(None, **entry.kwargs)
        assert middleware.get_security_headers("/api/v1/jobs")["Content-Security-Policy"] == DEFAULT_CSP
        assert middleware.get_security_headers("/api-docs")["Content-Security-Policy"] == DOCS_CSP

    def test_security_headers_on_not_found(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.headers["x-content-type-options"] == "nosniff"

    def test_cors_allows_any_origin_by_default(self, client):
        response = client.get("/", headers={"Origin": "https://example.com"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_cors_preflight(self, client):
        response = client.options(
            "/api/v1/jobs",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization",
            },
        )

        assert response.status_code == 200
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_cors_allow_list(self, context):
        """An explicit CORS_ORIGINS list only echoes listed origins."""
        context.settings = context.settings.model_copy(
            update={"CORS_ORIGINS": "https://jobs.example.com"}
        )
        client = TestClient(create_app(context))

        allowed = client.get("/", headers={"Origin": "https://jobs.example.com"})
        denied = client.get("/", headers={"Origin": "https://evil.example.com"})

        assert allowed.headers["access-control-allow-origin"] == "https://jobs.example.com"
        assert "access-control-allow-origin" not in denied.headers

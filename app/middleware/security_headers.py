"""Security headers middleware."""
from typing import Dict, Iterable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

DEFAULT_CSP = (
    "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
    "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
    "object-src 'none';script-src 'self';script-src-attr 'none';"
    "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
)

# Swagger UI is rendered from the jsDelivr CDN with an inline bootstrap script
DOCS_CSP = (
    "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
    "frame-ancestors 'self';img-src 'self' data: https:;object-src 'none';"
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net;"
    "style-src 'self' https: 'unsafe-inline';connect-src 'self'"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add protective headers to all responses.

    Mirrors the helmet defaults:
    - Content-Security-Policy
    - Cross-Origin-Opener-Policy / Cross-Origin-Resource-Policy
    - Origin-Agent-Cluster
    - Referrer-Policy: no-referrer
    - Strict-Transport-Security: max-age=15552000; includeSubDomains
    - X-Content-Type-Options: nosniff
    - X-DNS-Prefetch-Control: off
    - X-Download-Options: noopen
    - X-Frame-Options: SAMEORIGIN
    - X-Permitted-Cross-Domain-Policies: none
    - X-XSS-Protection: 0
    """

    DEFAULT_HEADERS = {
        "Cross-Origin-Opener-Policy": "same-origin",
        "Cross-Origin-Resource-Policy": "same-origin",
        "Origin-Agent-Cluster": "?1",
        "Referrer-Policy": "no-referrer",
        "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
        "X-Content-Type-Options": "nosniff",
        "X-DNS-Prefetch-Control": "off",
        "X-Download-Options": "noopen",
        "X-Frame-Options": "SAMEORIGIN",
        "X-Permitted-Cross-Domain-Policies": "none",
        "X-XSS-Protection": "0",
    }

    REMOVED_HEADERS = ("X-Powered-By",)

    def __init__(self, app, docs_paths: Iterable[str] = ()):
        """
        Args:
            app: The ASGI application
            docs_paths: Path prefixes that get the Swagger UI policy instead
        """
        super().__init__(app)
        self.docs_paths = tuple(docs_paths)

    def get_security_headers(self, path: str = "/") -> Dict[str, str]:
        """Get all security headers for a request path."""
        headers = dict(self.DEFAULT_HEADERS)
        if self.docs_paths and path.startswith(self.docs_paths):
            headers["Content-Security-Policy"] = DOCS_CSP
        else:
            headers["Content-Security-Policy"] = DEFAULT_CSP
        return headers

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        for header in self.REMOVED_HEADERS:
            if header in response.headers:
                del response.headers[header]
        for header, value in self.get_security_headers(request.url.path).items():
            response.headers[header] = value

        return response

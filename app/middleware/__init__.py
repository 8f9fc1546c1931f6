# =============================================================================
# app/middleware/ - Request Pipeline Stages
# =============================================================================
# Each module holds one stage of the request pipeline. The order they run in
# is decided in app/main.py, not here.
# =============================================================================

from app.middleware.body_parser import JSONBodyParserMiddleware
from app.middleware.proxy import TrustProxyMiddleware
from app.middleware.rate_limit import RateLimitMiddleware, RateLimitStore
from app.middleware.sanitize import SanitizeMiddleware
from app.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "JSONBodyParserMiddleware",
    "TrustProxyMiddleware",
    "RateLimitMiddleware",
    "RateLimitStore",
    "SanitizeMiddleware",
    "SecurityHeadersMiddleware",
]

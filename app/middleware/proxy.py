"""Trusted proxy middleware: resolves the real client address."""
import logging

from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


def resolve_client_ip(forwarded_for: str | None, peer: str | None, trusted_hops: int) -> str | None:
    """
    Pick the client address out of an X-Forwarded-For chain.

    The chain is read right to left: the socket peer and the next
    ``trusted_hops - 1`` forwarded entries are proxies we trust, the entry
    after them is the client. With one trusted hop that is the right-most
    X-Forwarded-For entry.

    Example:
        resolve_client_ip("1.1.1.1, 2.2.2.2", "10.0.0.1", 1)  # "2.2.2.2"
        resolve_client_ip("1.1.1.1, 2.2.2.2", "10.0.0.1", 0)  # "10.0.0.1"
    """
    if trusted_hops <= 0 or not forwarded_for:
        return peer

    chain = [addr.strip() for addr in forwarded_for.split(",") if addr.strip()]
    chain.append(peer or "")
    if len(chain) > trusted_hops:
        return chain[-(trusted_hops + 1)]
    return chain[0]


class TrustProxyMiddleware:
    """
    Rewrite scope["client"] from X-Forwarded-For.

    Runs first so the rate limiter and handlers see the forwarded address
    (request.client.host) rather than the proxy's.
    """

    def __init__(self, app: ASGIApp, trusted_hops: int = 1):
        self.app = app
        self.trusted_hops = trusted_hops

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and self.trusted_hops > 0:
            forwarded_for = None
            for name, value in scope.get("headers", []):
                if name == b"x-forwarded-for":
                    forwarded_for = value.decode("latin-1")
                    break

            if forwarded_for:
                client = scope.get("client")
                peer, port = (client[0], client[1]) if client else (None, 0)
                ip = resolve_client_ip(forwarded_for, peer, self.trusted_hops)
                if ip and ip != peer:
                    scope = dict(scope)
                    scope["client"] = (ip, port)

        await self.app(scope, receive, send)

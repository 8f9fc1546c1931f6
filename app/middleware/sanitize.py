"""
Input sanitization middleware.

Escapes angle brackets in every query parameter value and every string in
the parsed JSON body before handlers see them. It never rejects a request.
"""

import json
from urllib.parse import parse_qsl, urlencode

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.middleware.body_parser import JSON_BODY_STATE_KEY
from lib.utils import sanitize_string, sanitize_value


def sanitize_query_string(query_string: bytes) -> bytes:
    """
    Sanitize the values of a raw query string.

    Example:
        sanitize_query_string(b"q=%3Cb%3E")  # b"q=%26lt%3Bb%26gt%3B"
    """
    if not query_string:
        return query_string
    pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
    cleaned = [(key, sanitize_string(value)) for key, value in pairs]
    if cleaned == pairs:
        return query_string
    return urlencode(cleaned).encode("latin-1")


def substitute_body(body: bytes, receive: Receive) -> Receive:
    """
    Drain the upstream body and hand ``body`` downstream in its place.

    Calls after the body has been delivered go straight to ``receive``.
    """
    delivered = False

    async def substituted() -> Message:
        nonlocal delivered
        if delivered:
            return await receive()
        message = await receive()
        while message["type"] == "http.request" and message.get("more_body", False):
            message = await receive()
        if message["type"] != "http.request":
            return message
        delivered = True
        return {"type": "http.request", "body": body, "more_body": False}

    return substituted


class SanitizeMiddleware:
    """
    Cleanse query parameters and JSON bodies in place.

    Relies on JSONBodyParserMiddleware having stored the parsed body in the
    request state; requests without one pass through with their body intact.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        scope = dict(scope)
        scope["query_string"] = sanitize_query_string(scope.get("query_string", b""))

        state = scope.get("state") or {}
        if JSON_BODY_STATE_KEY in state:
            cleaned = sanitize_value(state[JSON_BODY_STATE_KEY])
            state[JSON_BODY_STATE_KEY] = cleaned
            body = json.dumps(cleaned).encode("utf-8")
            scope["headers"] = [
                (name, value) for name, value in scope.get("headers", [])
                if name != b"content-length"
            ] + [(b"content-length", str(len(body)).encode("latin-1"))]
            receive = substitute_body(body, receive)

        await self.app(scope, receive, send)

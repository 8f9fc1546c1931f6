"""
JSON body parsing middleware.

Reads JSON request bodies once, enforces the size limit and rejects
malformed documents with 400 before any route sees them. The parsed value is
stored in the request state (request.state.json_body) for later stages and
the raw bytes are replayed to the application unchanged.
"""

import json
import logging

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import MalformedBodyError, PayloadTooLargeError

logger = logging.getLogger(__name__)

JSON_BODY_STATE_KEY = "json_body"


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def replay_body(body: bytes, receive: Receive) -> Receive:
    """
    Build a receive callable that yields ``body`` as a single message.

    Later calls fall through to the original receive so disconnects are
    still reported when they actually happen.
    """
    sent = False

    async def replay() -> Message:
        nonlocal sent
        if sent:
            return await receive()
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return replay


class JSONBodyParserMiddleware:
    """Parse JSON bodies up to ``max_size`` bytes."""

    def __init__(self, app: ASGIApp, max_size: int = 100 * 1024):
        self.app = app
        self.max_size = max_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = Headers(scope=scope)
        if not is_json_content_type(headers.get("content-type")):
            await self.app(scope, receive, send)
            return

        content_length = headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            await PayloadTooLargeError(int(content_length), self.max_size).to_response()(scope, receive, send)
            return

        chunks = []
        size = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            size += len(chunk)
            if size > self.max_size:
                await PayloadTooLargeError(size, self.max_size).to_response()(scope, receive, send)
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)
        body = b"".join(chunks)

        if body.strip():
            try:
                parsed = json.loads(body)
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.info(f"Rejected malformed JSON body on {scope.get('path')}: {e}")
                await MalformedBodyError(str(e)).to_response()(scope, receive, send)
                return
            scope.setdefault("state", {})[JSON_BODY_STATE_KEY] = parsed

        await self.app(scope, replay_body(body, receive), send)

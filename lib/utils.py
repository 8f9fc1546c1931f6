# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - ObjectId parsing for path parameters
# - XSS sanitization of nested JSON-like values
# - Base error class for lib/ modules
# =============================================================================

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId


# =============================================================================
# ObjectId Utilities
# =============================================================================

def parse_object_id(value: str | ObjectId) -> ObjectId | None:
    """
    Parse a string into an ObjectId.

    Returns None instead of raising so callers can map a malformed id to
    their own not-found error.

    Example:
        parse_object_id("65a1f0c2e4b0a1b2c3d4e5f6")  # ObjectId(...)
        parse_object_id("not-an-id")                 # None
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def serialize_document(document: dict[str, Any]) -> dict[str, Any]:
    """Convert ObjectId values in a Mongo document to strings for JSON output."""
    return {
        key: str(value) if isinstance(value, ObjectId) else value
        for key, value in document.items()
    }


# =============================================================================
# Sanitization
# =============================================================================

_HTML_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
}


def sanitize_string(value: str) -> str:
    """
    Neutralize characters that can open an HTML/script context.

    Only angle brackets are replaced and '&' is left alone, so running this
    on an already sanitized value returns it unchanged.

    Example:
        sanitize_string("<script>alert(1)</script>")
        # "&lt;script&gt;alert(1)&lt;/script&gt;"
    """
    for char, escaped in _HTML_ESCAPES.items():
        value = value.replace(char, escaped)
    return value


def sanitize_value(value: Any) -> Any:
    """
    Recursively sanitize every string inside dicts and lists.

    Dict keys are left untouched; non-string scalars pass through.
    """
    if isinstance(value, str):
        return sanitize_string(value)
    if isinstance(value, dict):
        return {key: sanitize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [sanitize_value(item) for item in value]
    return value


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for lib/ errors that are not HTTP aware.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - mongo_client.py: Shared MongoDB connection (motor)
# - utils.py: ObjectId helpers, XSS sanitization, base error class
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.mongo_client import Database, DatabaseConnectionError
from lib.utils import (
    ApplicationError,
    parse_object_id,
    sanitize_string,
    sanitize_value,
    serialize_document,
)

__all__ = [
    # MongoDB
    "Database",
    "DatabaseConnectionError",
    # Utils
    "ApplicationError",
    "parse_object_id",
    "sanitize_string",
    "sanitize_value",
    "serialize_document",
]

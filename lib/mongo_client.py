# =============================================================================
# lib/mongo_client.py - MongoDB Connection Wrapper
# =============================================================================
# Owns the single AsyncIOMotorClient shared by every request.
# The application composer creates one Database, awaits connect() before the
# HTTP listener is bound, and closes it on shutdown.
#
# Usage:
#   database = Database()
#   await database.connect(settings.MONGO_URI)
#   jobs = database.collection("jobs")
# =============================================================================

from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "jobs-api"


class DatabaseConnectionError(ApplicationError):
    """Raised when the database cannot be reached or is not configured."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="DATABASE_CONNECTION_FAILED", **kwargs)


class Database:
    """
    Shared MongoDB handle.

    One instance lives in the AppContext for the whole process lifetime.
    Collections are only available after connect() succeeded.
    """

    def __init__(self, db_name: str | None = None, timeout_ms: int = 5000):
        self._db_name = db_name
        self._timeout_ms = timeout_ms
        self._client: AsyncIOMotorClient | None = None
        self._db: AsyncIOMotorDatabase | None = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise DatabaseConnectionError(
                "Database is not connected",
                suggestion="Await Database.connect() before handling requests",
            )
        return self._db

    def collection(self, name: str) -> AsyncIOMotorCollection:
        return self.db[name]

    async def connect(self, uri: str | None) -> AsyncIOMotorDatabase:
        """
        Open the connection and verify the server answers a ping.

        Args:
            uri: MongoDB connection string

        Returns:
            The selected database

        Raises:
            DatabaseConnectionError: If the URI is missing/invalid or the
                server does not respond within the timeout
        """
        if not uri:
            raise DatabaseConnectionError(
                "No MongoDB connection string provided",
                suggestion="Set MONGO_URI in your environment or .env file",
            )

        client = None
        try:
            client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=self._timeout_ms)
            if self._db_name:
                db = client[self._db_name]
            else:
                db = client.get_default_database(DEFAULT_DB_NAME)
            await client.admin.command("ping")
        except (PyMongoError, ValueError) as e:
            if client is not None:
                client.close()
            raise DatabaseConnectionError(
                f"Failed to connect to MongoDB: {e}",
                suggestion="Check that MONGO_URI is correct and the server is reachable",
            ) from e

        self._client = client
        self._db = db
        logger.info(f"Connected to MongoDB database '{db.name}'")
        return self._db

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")
        self._client = None
        self._db = None

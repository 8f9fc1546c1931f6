# =============================================================================
# core/services/user_service.py - User Registration and Login
# =============================================================================
# Handles user persistence and password checks.
# Token issuing lives in app/auth/tokens.py; this service only decides who a
# user is.
# =============================================================================

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

import bcrypt
from pymongo.errors import DuplicateKeyError

from app.exceptions import BadRequestError, DuplicateValueError, UnauthenticatedError
from core.models.user import MAX_PASSWORD_BYTES
from lib.mongo_client import Database
from lib.utils import serialize_document

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class UserService:
    """
    Service for user accounts.

    Holds a reference to the shared Database; the collection is looked up on
    each call because the connection is opened after the service is built.
    """

    def __init__(self, database: Database):
        self._database = database

    @property
    def collection(self):
        return self._database.collection(USERS_COLLECTION)

    async def ensure_indexes(self) -> None:
        await self.collection.create_index("email", unique=True)

    async def create_user(self, name: str, email: str, password: str) -> dict[str, Any]:
        """
        Create a new user with a hashed password.

        Args:
            name: Display name
            email: Unique login e-mail
            password: Plain-text password

        Returns:
            The stored user document (without the password hash)

        Raises:
            BadRequestError: If the password is too long for bcrypt
            DuplicateValueError: If the e-mail is already registered
        """
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise BadRequestError(
                f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes",
                code="PASSWORD_TOO_LONG",
            )

        password_hash = await asyncio.to_thread(hash_password, password)
        now = datetime.now(timezone.utc)
        document = {
            "name": name,
            "email": email.lower(),
            "password": password_hash,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError:
            logger.info(f"Registration rejected, email already in use: {email}")
            raise DuplicateValueError("email")

        document["_id"] = result.inserted_id
        logger.info(f"Registered user: {result.inserted_id}")
        return self._public(document)

    async def authenticate(self, email: str | None, password: str | None) -> dict[str, Any]:
        """
        Check an e-mail/password pair.

        Raises:
            BadRequestError: If either value is missing
            UnauthenticatedError: If the user is unknown or the password is wrong
        """
        if not email or not password:
            raise BadRequestError("Please provide email and password", code="MISSING_CREDENTIALS")

        user = await self.collection.find_one({"email": email.lower()})
        if user is None:
            logger.warning(f"Login failed, unknown email: {email}")
            raise UnauthenticatedError("Invalid Credentials")

        matches = await asyncio.to_thread(check_password, password, user.get("password", ""))
        if not matches:
            logger.warning(f"Login failed, wrong password for user: {user['_id']}")
            raise UnauthenticatedError("Invalid Credentials")

        return self._public(user)

    @staticmethod
    def _public(document: dict[str, Any]) -> dict[str, Any]:
        user = {key: value for key, value in document.items() if key != "password"}
        return serialize_document(user)

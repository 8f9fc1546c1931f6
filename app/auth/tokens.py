# =============================================================================
# app/auth/tokens.py - JWT Issuing and Verification
# =============================================================================
# Tokens are HS256 JWTs signed with JWT_SECRET and carry the claims
#   userId, name, iat, exp
# =============================================================================

import time

from jose import jwt

from app.auth.models import TokenPayload
from app.config import Settings

ALGORITHM = "HS256"


def create_token(user_id: str, name: str, settings: Settings) -> str:
    """
    Issue a signed bearer token for a user.

    Args:
        user_id: The user's id (stringified ObjectId)
        name: Display name, echoed back to clients
        settings: Provides JWT_SECRET and JWT_LIFETIME

    Returns:
        Encoded JWT string
    """
    now = int(time.time())
    claims = {
        "userId": str(user_id),
        "name": name,
        "iat": now,
        "exp": now + settings.jwt_lifetime_seconds,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings) -> TokenPayload:
    """
    Verify a token and return its claims.

    Raises:
        jose.JWTError: If the signature is invalid or the token expired
        pydantic.ValidationError: If required claims are missing
    """
    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
    return TokenPayload.model_validate(payload)

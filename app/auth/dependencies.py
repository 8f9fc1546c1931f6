# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Validates the bearer token on protected routers and attaches the identity
# to request.state.user.
#
# Usage:
#   app.include_router(jobs.router, dependencies=[Depends(authenticate_user)])
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from pydantic import ValidationError

from app.auth.models import AuthUser
from app.auth.tokens import decode_token
from app.dependencies import SettingsDep
from app.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)

# Missing headers are reported through UnauthenticatedError so the payload
# matches every other error
security = HTTPBearer(auto_error=False)


async def authenticate_user(
    request: Request,
    settings: SettingsDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Extract and validate the user from the bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature and expiry
    3. Attaches an AuthUser to request.state.user and returns it

    Raises:
        UnauthenticatedError: 401 if the header is missing or the token is
            invalid or expired
    """
    if credentials is None or not credentials.credentials:
        logger.warning(f"Missing bearer token on {request.method} {request.url.path}")
        raise UnauthenticatedError()

    try:
        payload = decode_token(credentials.credentials, settings)
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise UnauthenticatedError()
    except (JWTError, ValidationError) as e:
        logger.warning(f"JWT validation failed: {e}")
        raise UnauthenticatedError()

    user = AuthUser(user_id=payload.user_id, name=payload.name)
    request.state.user = user
    logger.debug(f"Authenticated user: {user.user_id}")
    return user

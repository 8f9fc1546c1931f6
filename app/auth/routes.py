# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Public endpoints: register a user, log in. Both return a bearer token that
# protected routers accept.
# =============================================================================

import logging

from fastapi import APIRouter, status

from app.auth.tokens import create_token
from app.dependencies import SettingsDep, UserServiceDep
from core.models.user import AuthResponse, LoginRequest, RegisterRequest, UserSummary

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    users: UserServiceDep,
    settings: SettingsDep,
) -> AuthResponse:
    """
    Register a new user.

    Returns:
        AuthResponse: The user's name and a bearer token

    Raises:
        400: If a field is invalid or the e-mail is already registered
    """
    user = await users.create_user(body.name, body.email, body.password)
    token = create_token(user["_id"], user["name"], settings)
    return AuthResponse(user=UserSummary(name=user["name"]), token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    users: UserServiceDep,
    settings: SettingsDep,
) -> AuthResponse:
    """
    Log in with e-mail and password.

    Raises:
        400: If email or password is missing
        401: If the credentials don't match a user
    """
    user = await users.authenticate(body.email, body.password)
    token = create_token(user["_id"], user["name"], settings)
    logger.info(f"User logged in: {user['_id']}")
    return AuthResponse(user=UserSummary(name=user["name"]), token=token)

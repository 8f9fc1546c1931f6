# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides bearer-token authentication for protected routers.
#
# Usage:
#   from app.auth import authenticate_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(authenticate_user)):
#       return {"user_id": user.user_id}
# =============================================================================

from app.auth.dependencies import authenticate_user
from app.auth.models import AuthUser, TokenPayload
from app.auth.tokens import create_token, decode_token

__all__ = [
    "authenticate_user",
    "AuthUser",
    "TokenPayload",
    "create_token",
    "decode_token",
]

# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for the identity carried by a bearer token.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from the JWT.

    This is the identity attached to request.state.user for protected
    routes; it is built from the token alone, without a database lookup.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    name: str
    exp: int
    iat: int | None = None

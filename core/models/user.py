# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for authentication:
# - RegisterRequest: Input for POST /auth/register
# - LoginRequest: Input for POST /auth/login
# - AuthResponse: Output for both, carrying the bearer token
#
# Passwords never leave the service layer; responses only expose the name.
# =============================================================================

from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class RegisterRequest(BaseModel):
    """
    Schema for registering a new user.

    Example:
        {
            "name": "Jane",
            "email": "jane@example.com",
            "password": "secret123"
        }
    """

    name: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Display name"
    )

    email: EmailStr = Field(
        ...,
        description="Unique e-mail address used to log in"
    )

    password: str = Field(
        ...,
        min_length=6,
        description="Plain-text password, hashed before storage"
    )

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """
    Schema for logging in.

    Both fields are optional at the schema level so that the route can answer
    with the same 400 message whichever one is missing.
    """

    email: str | None = None
    password: str | None = None


class UserSummary(BaseModel):
    name: str


class AuthResponse(BaseModel):
    """
    Returned by register and login.

    Example:
        {"user": {"name": "Jane"}, "token": "eyJhbGciOi..."}
    """

    user: UserSummary
    token: str

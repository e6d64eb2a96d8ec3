"""Authentication and profile schemas."""

from pydantic import Field

from shiori.schemas.base import CamelModel


class UserLogin(CamelModel):
    """Credentials login request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class RegisterResponse(CamelModel):
    success: bool
    message: str


class UserResponse(CamelModel):
    """User information response."""

    id: str
    email: str
    name: str | None
    image: str | None
    role: str


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse


class SessionResponse(CamelModel):
    """Session identity merged with the stored profile."""

    email: str
    name: str | None
    image: str | None
    role: str
    is_admin: bool


class ProfileUpdate(CamelModel):
    """Profile update request; blank names are rejected by the endpoint."""

    name: str | None = Field(None, max_length=255)
    image: str | None = None

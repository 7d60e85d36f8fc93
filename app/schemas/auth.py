"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

# Request fields are optional at the schema level so that a missing field is
# reported by the service as a 400 with a stable message, not a 422.


class RegisterRequest(BaseModel):
    """Sign-up payload."""

    model_config = {"extra": "ignore"}

    name: str | None = Field(default=None, max_length=255, description="Display name")
    email: str | None = Field(default=None, max_length=255, description="Login email")
    password: str | None = Field(default=None, max_length=128, description="Password")
    phone: str | None = Field(default=None, max_length=64, description="Contact phone")


class LoginRequest(BaseModel):
    """Credentials for login."""

    model_config = {"extra": "ignore"}

    email: str | None = Field(default=None, description="Login email")
    password: str | None = Field(default=None, description="Password")


class RegisteredUser(BaseModel):
    """Fields echoed back after registration (no password)."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    phone: str | None = None
    role: str


class UserPublic(RegisteredUser):
    """User record with the password stripped."""

    is_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RegisterResponse(BaseModel):
    message: str = "User created successfully"
    user: RegisteredUser


class LoginResponse(BaseModel):
    """JWT access token returned after successful login."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")
    user: UserPublic


class MeResponse(BaseModel):
    user: UserPublic


class Identity(BaseModel):
    """Authenticated caller as propagated to downstream handlers."""

    user_id: str
    email: str
    role: str


class UsersListResponse(BaseModel):
    """Response for GET /admin/users (admin only)."""

    users: list[UserPublic]


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    error: str

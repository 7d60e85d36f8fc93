"""Pydantic request/response schemas."""

from app.schemas.auth import (
    ErrorResponse,
    Identity,
    LoginRequest,
    LoginResponse,
    MeResponse,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
    UsersListResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "RegisteredUser",
    "RegisterRequest",
    "RegisterResponse",
    "UserPublic",
    "UsersListResponse",
]

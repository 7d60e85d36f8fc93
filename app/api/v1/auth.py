"""Register, login and me endpoints plus the auth gates (require_user, require_admin)."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings, is_database_configured
from app.core.database import get_db
from app.core.errors import (
    AuthError,
    AuthServiceError,
    ForbiddenError,
    InternalError,
    ServiceUnavailable,
)
from app.core.security import TokenCodec
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
)
from app.services.auth import authenticate, load_current_user, register_user

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@lru_cache
def get_token_codec() -> TokenCodec:
    """Dependency: codec built once from settings. Override in tests to inject another secret."""
    return TokenCodec.from_settings(get_settings())


def require_database_configured(
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    """Dependency: 503 when DATABASE_URL is missing or still a template."""
    if not is_database_configured(settings.DATABASE_URL, settings.DATABASE_URL_PLACEHOLDERS):
        raise ServiceUnavailable("Database not configured")


def require_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> Identity:
    """
    Dependency: require a valid Bearer JWT. Raises 401 if missing, invalid or expired.

    The identity is returned and also stored on request.state.identity for
    handlers and middleware further down the chain.
    """
    claims = codec.verify(credentials.credentials if credentials else None)
    if claims is None:
        raise AuthError("Unauthorized - Please login")
    identity = Identity(user_id=claims.userId, email=claims.email, role=claims.role)
    request.state.identity = identity
    return identity


def require_admin(
    identity: Annotated[Identity, Depends(require_user)],
) -> Identity:
    """Dependency: require authenticated user with role 'admin'. 401 first, then 403."""
    if identity.role != ADMIN_ROLE:
        raise ForbiddenError("Forbidden - Admin access required")
    return identity


@router.post("/register", response_model=RegisterResponse, responses=ERROR_RESPONSES)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RegisterResponse:
    """Create an account. No token is issued; call /login afterwards."""
    try:
        user = register_user(db, body, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    except AuthServiceError:
        raise
    except Exception:
        logger.exception("Registration error")
        db.rollback()
        raise InternalError()
    return RegisterResponse(user=RegisteredUser.model_validate(user))


@router.post("/login", response_model=LoginResponse, responses=ERROR_RESPONSES)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        token, user = authenticate(db, body, codec)
    except AuthServiceError:
        raise
    except Exception:
        logger.exception("Login error")
        raise InternalError()
    return LoginResponse(token=token, user=UserPublic.model_validate(user))


@router.get(
    "/me",
    response_model=MeResponse,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
def me(
    _configured: Annotated[None, Depends(require_database_configured)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    db: Annotated[Session, Depends(get_db)],
) -> MeResponse:
    """Return the current user's record, re-read from the database."""
    claims = codec.verify(credentials.credentials if credentials else None)
    if claims is None:
        raise AuthError("Unauthorized")
    try:
        user = load_current_user(db, claims)
    except AuthServiceError:
        raise
    except Exception:
        logger.exception("Get current user error")
        raise InternalError()
    return MeResponse(user=UserPublic.model_validate(user))

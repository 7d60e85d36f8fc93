"""Admin-only endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.database import get_db
from app.core.errors import InternalError
from app.schemas.auth import Identity, UserPublic, UsersListResponse
from app.services.auth import list_users

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/users", response_model=UsersListResponse)
def get_users(
    admin: Annotated[Identity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only), newest first. Passwords are never included."""
    try:
        users = list_users(db)
    except Exception:
        logger.exception("Error fetching users", extra={"admin_id": admin.user_id})
        raise InternalError()
    return UsersListResponse(users=[UserPublic.model_validate(u) for u in users])

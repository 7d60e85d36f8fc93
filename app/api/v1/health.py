"""Health check endpoint with optional database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings, is_database_configured
from app.core.database import SessionLocal, check_db_connected
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(settings: Annotated[Settings, Depends(get_settings)]) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    if not is_database_configured(settings.DATABASE_URL, settings.DATABASE_URL_PLACEHOLDERS):
        db_status = "not_configured"
    else:
        db = SessionLocal()
        try:
            db_status = "connected" if check_db_connected(db) else "disconnected"
        finally:
            db.close()

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
    )

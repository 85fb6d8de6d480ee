"""Liveness endpoint. Reports 503 when the database cannot be reached."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from rollcall.core.config import settings
from rollcall.core.database import check_db_connected, get_db
from rollcall.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(response: Response, db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    connected = check_db_connected(db)
    if not connected:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(
        success=connected,
        message="Rollcall is running." if connected else "Rollcall is running without its database.",
        datetime=datetime.now(timezone.utc),
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
    )

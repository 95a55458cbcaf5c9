# perks_api/routes/health.py
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from perks_api.core.logging import get_structlog_logger
from perks_api.db.session import get_session, health_check

logger = get_structlog_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_probe():
    """Simple liveness probe for containers."""
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/ready")
async def readiness_probe(session: AsyncSession = Depends(get_session)):
    """Readiness probe that checks the database."""
    database = await health_check(session)
    is_ready = database["status"] == "healthy"

    if not is_ready:
        logger.warning("health.not_ready", checks={"database": database})

    return JSONResponse(
        status_code=status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if is_ready else "not_ready",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {"database": database},
        },
    )

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from staffhub.db import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        - status: overall health status
        - timestamp: current server time
        - database: database connection status
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "staffhub-backend",
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["database"] = "connected"
    except Exception as e:
        logger.warning("Health check database probe failed: %s", e)
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        health_status["error"] = str(e)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status)

    return health_status


@router.get("/readiness", status_code=status.HTTP_200_OK)
async def readiness_check():
    """
    Readiness check for container orchestration.
    Returns 200 if the service is ready to accept traffic.
    """
    return {"ready": True}

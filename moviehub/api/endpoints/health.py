# /health endpoint

# moviehub/api/endpoints/health.py

import logging

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

logger = logging.getLogger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "ok"
    database: str = "connected"


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Perform a Readiness Check",
    response_description="Reports whether the database is reachable.",
    responses={503: {"model": HealthResponse}},
)
async def health_check(request: Request, response: Response):
    """
    Readiness probe. The root route is the liveness probe and never touches
    the database; this one pings it.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="unavailable", database="disconnected")

    try:
        await db.command("ping")
    except Exception as e:
        logger.warning(f"Health check ping failed: {e}")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="unavailable", database="unreachable")

    return HealthResponse(status="ok", database="connected")

"""
Debug and health endpoints
"""
import asyncio
import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from office_admin.api.models import HealthResponse
from office_admin.dependencies import get_store
from office_admin.services.schedule_store import ScheduleStore

router = APIRouter(tags=["debug"])

logger = logging.getLogger(__name__)


@router.get("/api/v1/health", response_model=HealthResponse)
async def health_check(store: ScheduleStore = Depends(get_store)):
    """Health check endpoint, including database reachability"""
    try:
        reachable = await asyncio.to_thread(store.ping)
    except Exception:
        logger.error("Database health check failed", exc_info=True)
        reachable = False

    return HealthResponse(
        status="healthy" if reachable else "degraded",
        service="Office Admin Backend",
        timestamp=datetime.now().isoformat(),
        database={"path": str(store.db_path), "reachable": reachable},
    )


@router.get("/healthz")
async def liveness_check():
    """Liveness probe for the deployment platform"""
    return {"status": "ok"}

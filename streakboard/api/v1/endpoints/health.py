"""
Health check endpoints
"""

import httpx
import psutil
from fastapi import APIRouter, Depends

from streakboard.api.deps import get_http_client
from streakboard.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.APP_VERSION,
    }


@router.get("/health/detailed")
async def detailed_health_check(http_client: httpx.AsyncClient = Depends(get_http_client)):
    """Detailed health check"""
    health_status = {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.APP_VERSION,
        "checks": {},
    }

    # Any HTTP answer means the tracks API is reachable
    try:
        response = await http_client.get("/", timeout=2.0)
        health_status["checks"]["upstream"] = {
            "status": "reachable",
            "status_code": response.status_code,
        }
    except httpx.HTTPError as e:
        health_status["checks"]["upstream"] = {"status": f"unreachable: {type(e).__name__}"}
        health_status["status"] = "degraded"

    memory = psutil.virtual_memory()
    health_status["checks"]["resources"] = {
        "cpu_percent": psutil.cpu_percent(interval=None),
        "memory_percent": memory.percent,
        "memory_available_mb": memory.available / (1024 * 1024),
    }

    return health_status

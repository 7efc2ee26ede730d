"""
Health endpoint reporting reachability of each backing service.

Version: 1.0
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from platform_services.client import PlatformClient
from platform_services.core.dependencies import get_client

router = APIRouter()


@router.get("/health", tags=["Health"])
async def health(client: PlatformClient = Depends(get_client)) -> JSONResponse:
    """
    Probe the database and storage services.

    Returns 200 when every service answers, 503 otherwise.
    """
    services = await client.check_health()
    healthy = all(services.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ok" if healthy else "degraded",
            "project_id": client.config.project_id,
            "services": services,
        },
    )

"""
Health check endpoints.

Reports service liveness and whether the employee API answers.
"""

import logging
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, status
from datetime import datetime, timezone

from app.core.deps import get_api_service
from app.schemas.employee import Gender
from app.services.api_service import ApiEndpoints, ApiService, ApiServiceError

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, str]:
    """
    Basic health check endpoint.

    Returns 200 OK if the service is running.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/health/detailed", status_code=status.HTTP_200_OK)
async def detailed_health_check(api: ApiService = Depends(get_api_service)) -> Dict[str, Any]:
    """
    Detailed health check with upstream status.

    Fetches the gender reference list, the cheapest read the employee API offers.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {}
    }

    try:
        await api.get(ApiEndpoints.GENDERS, List[Gender])
        health_status["checks"]["employee_api"] = {
            "status": "healthy",
            "message": f"Employee API reachable at {api.base_url}"
        }
    except ApiServiceError as e:
        logger.error(f"Employee API health check failed: {e.message}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["employee_api"] = {
            "status": "unhealthy",
            "message": f"Employee API error: {e.message}"
        }

    return health_status

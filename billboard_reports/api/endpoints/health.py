"""Health check endpoint for service monitoring."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from billboard_reports import __version__
from billboard_reports.api.deps import ReportStoreDep, SettingsDep

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=Dict[str, Any],
    summary="Health Check",
    description="Check if the API service is running.",
)
async def health_check(store: ReportStoreDep, settings: SettingsDep) -> Dict[str, Any]:
    """Perform a basic health check.

    Returns:
        Dictionary with service status and metadata.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.APP_ENV,
        "version": __version__,
        "reports": store.count(),
    }

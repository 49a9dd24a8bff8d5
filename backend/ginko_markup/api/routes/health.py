"""Health check endpoints."""

from fastapi import APIRouter, Depends

from ginko_markup.api.deps import get_app_settings
from ginko_markup.core.config import Settings

router = APIRouter()


@router.get("/health", tags=["system"])
def healthcheck(settings: Settings = Depends(get_app_settings)) -> dict[str, object]:
    """Readiness probe reporting the active rewrite rules."""

    return {
        "status": "ok",
        "app": settings.app_name,
        "environment": settings.environment,
        "rules": list(settings.enabled_rules),
    }

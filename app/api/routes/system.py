from fastapi import APIRouter, Request

from api.dependencies.rate_limits import get_limiter
from infrastructure.services import DispatchEngineDep, SettingsDep

router = APIRouter(tags=["System"])
limiter = get_limiter()


# The load balancer polls these every few seconds; keep the limit generous
@router.get("/version")
@limiter.limit("50/minute")
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit("50/minute")
def get_health(request: Request, engine: DispatchEngineDep):  # pylint: disable=unused-argument
    """Healthcheck endpoint with directory and transport status."""
    checks = engine.health_check()
    return {
        "status": "ok" if all(checks.values()) else "degraded",
        "checks": checks,
    }

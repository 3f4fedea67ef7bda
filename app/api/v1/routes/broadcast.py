from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from api.dependencies.rate_limits import get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.notifications import DispatchError
from infrastructure.services import CallerAuthDep, DispatchEngineDep
from modules.messaging import handle_broadcast_call

logger = get_module_logger()
router = APIRouter(tags=["Broadcast"])
limiter = get_limiter()

ERROR_STATUS_CODES = {
    "unauthenticated": 401,
    "invalid-argument": 400,
    "internal": 500,
}


@router.post("/broadcast")
@limiter.limit("10/minute")
def broadcast(
    request: Request,  # pylint: disable=unused-argument
    auth: CallerAuthDep,
    engine: DispatchEngineDep,
    payload: Optional[Dict[str, Any]] = Body(default=None),
):
    """Send an operator broadcast to a topic or to every recipient with a token.

    Args:
        request (Request): The FastAPI request object (rate limiting).
        auth (CallerAuth): Caller assertion from the bearer token.
        engine (DispatchEngine): The dispatch engine.
        payload (dict): ``{"title", "body", "topic"?}``.

    Returns:
        dict: ``{"success": true, "response": {...}}``, or an
        ``{"error": {"code", "message"}}`` body with 401, 400 or 500.
    """
    try:
        return handle_broadcast_call(payload, auth, engine=engine)
    except DispatchError as e:
        return JSONResponse(
            status_code=ERROR_STATUS_CODES.get(e.code, 500),
            content={"error": e.to_dict()},
        )

"""Error classifiers for provider exceptions.

Converts Firebase Cloud Messaging (HTTP v1) failures raised through
``requests`` into standardized OperationResult objects, so the delivery
transport can decide which failures invalidate a device token.

Usage:
    from infrastructure.operations.classifiers import classify_fcm_error

    try:
        response = session.post(url, json=body, timeout=10)
        response.raise_for_status()
    except Exception as exc:
        return classify_fcm_error(exc)
"""

from typing import Any, Dict, Optional

from requests import HTTPError, RequestException

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

FCM_ERROR_TYPE = "type.googleapis.com/google.firebase.fcm.v1.FcmError"


def _error_body(exc: HTTPError) -> Dict[str, Any]:
    response = exc.response
    if response is None:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    if not isinstance(body, dict):
        return {}
    error = body.get("error")
    return error if isinstance(error, dict) else {}


def extract_fcm_error_code(error: Dict[str, Any]) -> Optional[str]:
    """Return the most specific FCM error code found in an error body.

    FCM reports its own ``errorCode`` (e.g. ``UNREGISTERED``) inside the
    ``details`` list; the generic RPC ``status`` is used when it is absent.
    """
    for detail in error.get("details") or []:
        if isinstance(detail, dict) and detail.get("@type") == FCM_ERROR_TYPE:
            code = detail.get("errorCode")
            if code:
                return code
    return error.get("status")


def classify_fcm_error(exc: Exception) -> OperationResult:
    """Classify FCM HTTP v1 send errors into OperationResult.

    Status Code Mapping:
    - 429: Quota exceeded → TRANSIENT_ERROR with retry_after
    - 401/403: Auth or sender mismatch → UNAUTHORIZED
    - 404: Token no longer registered → NOT_FOUND
    - 400: Invalid argument (payload or token) → PERMANENT_ERROR
    - 5xx: Server unavailable → TRANSIENT_ERROR
    - Other: Unknown error → PERMANENT_ERROR

    Connection errors and timeouts are transient.

    Args:
        exc: Exception raised while calling the FCM send endpoint

    Returns:
        OperationResult with status, message and the FCM error code
    """
    if not isinstance(exc, HTTPError):
        if isinstance(exc, RequestException):
            return OperationResult.transient_error(
                f"FCM connection error: {type(exc).__name__}: {str(exc)}",
                error_code="CONNECTION_ERROR",
            )
        return OperationResult.permanent_error(
            f"FCM error: {type(exc).__name__}: {str(exc)}",
            error_code="UNKNOWN_ERROR",
        )

    status_code: Optional[int] = None
    if exc.response is not None:
        status_code = exc.response.status_code

    error = _error_body(exc)
    fcm_code = extract_fcm_error_code(error)
    detail = error.get("message") or str(exc)

    if status_code == 429:
        retry_after = 60
        header_value = exc.response.headers.get("Retry-After")
        if header_value:
            try:
                retry_after = int(header_value)
            except (ValueError, TypeError):
                pass
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            f"FCM quota exceeded: {detail}",
            error_code=fcm_code or "QUOTA_EXCEEDED",
            retry_after=retry_after,
        )

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"FCM request not authorized: {detail}",
            error_code=fcm_code or "UNAUTHORIZED",
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            f"FCM target not found: {detail}",
            error_code=fcm_code or "NOT_FOUND",
        )

    if status_code == 400:
        return OperationResult.permanent_error(
            f"FCM rejected request: {detail}",
            error_code=fcm_code or "INVALID_ARGUMENT",
        )

    if status_code and 500 <= status_code < 600:
        return OperationResult.transient_error(
            f"FCM server error ({status_code}): {detail}",
            error_code=fcm_code or "UNAVAILABLE",
        )

    return OperationResult.permanent_error(
        f"FCM error ({status_code}): {detail}",
        error_code=fcm_code or "UNKNOWN_ERROR",
    )

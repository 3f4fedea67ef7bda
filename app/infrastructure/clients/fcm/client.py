"""Firebase Cloud Messaging HTTP v1 client.

Authenticates with a service account (google-auth) and posts messages to
the FCM ``messages:send`` endpoint. Every call returns an OperationResult;
HTTP and network failures are classified by ``classify_fcm_error``.
"""

import json
import threading
from typing import Any, Dict, Optional

import structlog
from google.auth.transport.requests import AuthorizedSession, Request
from google.oauth2 import service_account

from infrastructure.operations import OperationResult, classify_fcm_error

logger = structlog.get_logger()

FCM_SCOPES = ["https://www.googleapis.com/auth/firebase.messaging"]


class FCMClient:
    """Client for the FCM HTTP v1 API.

    Args:
        project_id: Firebase project ID
        credentials_json: Service account JSON key file content
        api_url: Base URL of the FCM API
        timeout_seconds: HTTP timeout for a single send

    Thread Safety:
        Sends may run concurrently (multicast fan-out). Each thread gets its
        own AuthorizedSession; the underlying credentials are shared.
    """

    def __init__(
        self,
        project_id: str,
        credentials_json: Optional[str],
        api_url: str = "https://fcm.googleapis.com",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._project_id = project_id
        self._credentials_json = credentials_json
        self._api_url = api_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._credentials = None
        self._credentials_lock = threading.Lock()
        self._local = threading.local()
        self._logger = logger.bind(component="fcm_client", project_id=project_id)

    @property
    def send_url(self) -> str:
        """Fully-qualified ``messages:send`` endpoint for the project."""
        return f"{self._api_url}/v1/projects/{self._project_id}/messages:send"

    def _get_credentials(self) -> service_account.Credentials:
        """Load service account credentials once.

        Raises:
            ValueError: If credentials are missing or invalid
        """
        with self._credentials_lock:
            if self._credentials is None:
                if not self._credentials_json:
                    raise ValueError("FCM credentials are not configured")
                try:
                    creds_info = json.loads(self._credentials_json)
                    self._credentials = (
                        service_account.Credentials.from_service_account_info(
                            creds_info, scopes=FCM_SCOPES
                        )
                    )
                except json.JSONDecodeError as e:
                    self._logger.error("invalid_credentials_json", error=str(e))
                    raise ValueError("Invalid FCM credentials JSON") from e
            return self._credentials

    def _get_session(self) -> AuthorizedSession:
        session = getattr(self._local, "session", None)
        if session is None:
            session = AuthorizedSession(self._get_credentials())
            self._local.session = session
        return session

    def send(self, message: Dict[str, Any], validate_only: bool = False) -> OperationResult:
        """Send one FCM message.

        Args:
            message: FCM v1 ``Message`` object (token/topic, notification, data...)
            validate_only: Ask FCM to validate without delivering

        Returns:
            OperationResult with ``{"name": <message id>}`` on success

        Raises:
            ValueError: If credentials cannot be loaded
        """
        session = self._get_session()
        body: Dict[str, Any] = {"message": message}
        if validate_only:
            body["validate_only"] = True

        try:
            response = session.post(
                self.send_url, json=body, timeout=self._timeout_seconds
            )
            response.raise_for_status()
        except Exception as exc:  # pylint: disable=broad-except
            result = classify_fcm_error(exc)
            self._logger.warning(
                "fcm_send_failed",
                status=result.status.value,
                error_code=result.error_code,
                error=result.message,
            )
            return result

        try:
            response_data = response.json()
        except ValueError:
            response_data = {}
        return OperationResult.success(
            data={"name": response_data.get("name")},
            message="Message accepted by FCM",
        )

    def healthcheck(self) -> OperationResult:
        """Check that credentials load and an access token can be obtained."""
        try:
            credentials = self._get_credentials()
            credentials.refresh(Request())
        except Exception as e:  # pylint: disable=broad-except
            self._logger.error("fcm_health_check_failed", error=str(e))
            return OperationResult.transient_error(
                message=f"FCM health check failed: {str(e)}",
                error_code="HEALTH_CHECK_ERROR",
            )
        return OperationResult.success(
            data={"project_id": self._project_id},
            message="FCM credentials valid",
        )

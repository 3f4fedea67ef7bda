"""Operation status enumeration.

Status codes shared by the AWS and FCM client wrappers so the directory,
retention store and delivery transport can classify outcomes uniformly.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, throttling, 5xx)
        PERMANENT_ERROR: Non-retryable error (validation, rejected request)
        UNAUTHORIZED: Credentials missing, expired or lacking permission
        NOT_FOUND: Target resource (item, token, project) does not exist
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"

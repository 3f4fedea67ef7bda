"""Operation result types and status enums.

Standardized result types returned by the infrastructure clients, plus the
classifier that maps FCM send failures onto them.
"""

from infrastructure.operations.classifiers import classify_fcm_error
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_fcm_error",
]

"""Infrastructure modules for the push dispatch service.

Centralized infrastructure components:
- configuration: Settings management (Settings and domain sub-settings)
- logging: structlog configuration and event context binding
- operations: Operation results and provider error classification
- clients: AWS (DynamoDB) and Firebase Cloud Messaging clients
- notifications: Dispatch engine, recipient directory, transports, retention
- security: Bearer-token caller assertion
- services: Dependency injection providers (get_settings, get_dispatch_engine)
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]

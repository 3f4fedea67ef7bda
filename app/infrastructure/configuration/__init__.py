"""Infrastructure configuration module - public API.

Centralized configuration management for the push dispatch service using
Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (use ``get_settings()`` for the singleton)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    region = settings.aws.AWS_REGION
    batch_size = settings.dispatch.MULTICAST_BATCH_SIZE
    ```
"""

from infrastructure.configuration.settings import Settings

__all__ = ["Settings"]

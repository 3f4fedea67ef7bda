"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.dispatch import DispatchSettings
from infrastructure.configuration.features.retention import RetentionSettings

__all__ = [
    "DispatchSettings",
    "RetentionSettings",
]

"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.aws import AwsSettings
from infrastructure.configuration.integrations.fcm import FcmSettings

__all__ = [
    "AwsSettings",
    "FcmSettings",
]

"""Configuration module for filer."""

from .manager import ConfigManager
from .models import FilerConfig, LoggingSettings

__all__ = [
    "FilerConfig",
    "LoggingSettings",
    "ConfigManager",
]

"""Configuration module."""

from ecobreak.config.logging import configure_logging, get_logger
from ecobreak.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "configure_logging",
    "get_logger",
    "get_settings",
]

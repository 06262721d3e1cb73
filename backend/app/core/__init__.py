"""Core utilities and configuration."""

from app.core.config import Settings, get_settings
from app.core.logging import get_logger, scoring_logger, setup_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "get_logger",
    "scoring_logger",
    "setup_logging",
]

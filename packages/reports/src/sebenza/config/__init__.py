"""Configuration module for Sebenza reporting."""

from sebenza.config.logging import configure_logging, get_logger
from sebenza.config.settings import FlatSettings, get_settings

__all__ = ["FlatSettings", "get_settings", "configure_logging", "get_logger"]

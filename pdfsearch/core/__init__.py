"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, reload_config, Config, CacheConfig, SearchConfig
from .logger import get_logger
from .exceptions import (
    DocumentSearchError,
    ConfigurationError,
    QueryError,
    ExtractionError,
    DocumentNotFoundError,
    SizeExceededError
)

__all__ = [
    "get_config",
    "reload_config",
    "Config",
    "CacheConfig",
    "SearchConfig",
    "get_logger",
    "DocumentSearchError",
    "ConfigurationError",
    "QueryError",
    "ExtractionError",
    "DocumentNotFoundError",
    "SizeExceededError"
]

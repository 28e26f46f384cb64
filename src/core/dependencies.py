"""Singleton management for the MCP handler kit."""

from functools import lru_cache
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Global singletons
_tool_logger: Optional["StructuredToolLogger"] = None


@lru_cache()
def get_app_config() -> "AppConfig":
    """Get singleton AppConfig instance.

    This function is cached to ensure only one AppConfig instance exists.
    """
    from core.config import AppConfig
    config = AppConfig.from_env()
    logger.info("Initialized AppConfig singleton")
    return config


def get_tool_logger() -> "StructuredToolLogger":
    """Get the process-wide tool logger used when none is injected."""
    global _tool_logger
    if _tool_logger is None:
        from core.tool_logger import StructuredToolLogger
        config = get_app_config()
        _tool_logger = StructuredToolLogger(slow_operation_ms=config.logging.slow_operation_ms)
    return _tool_logger


def reset_singletons():
    """Reset all singletons (useful for testing)."""
    global _tool_logger
    _tool_logger = None
    get_app_config.cache_clear()
    logger.info("Reset all singletons")

"""
Helpers context logger.

Provides logging interface for helpers context with automatic [helper] prefix.
All helper modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[helper]"


def _log_warning(message: str) -> None:
    """Log warning message with [helper] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [helper] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")

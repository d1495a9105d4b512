"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from folio.contexts.rendering.config import RendererConfig
from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Path,
    command: str,
    source: Path,
    config: RendererConfig,
    config_path: Optional[str] = None,
) -> Path:
    """
    Setup logger for a rendering session.

    The session header records what the output depends on: the template source
    (directory or bundle), the config file and the undefined-variable profile.

    Args:
        log_dir: Directory for this rendering session
        command: CLI command name ("precompile" or "render")
        source: Templates directory or bundle path
        config: Engine options in effect
        config_path: Config file the options came from, if any

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        provenance={
            "Folio command": command,
            "Template source": source,
            "Renderer config": config_path or "built-in defaults",
            "Undefined profile": "strict" if config.strict_undefined else "lenient",
        },
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_template_registered(path: str, precompiled: bool) -> None:
    """Log a newly registered partial."""
    source = "precompiled artifact" if precompiled else "raw source"
    _log_debug(f"Registered template '{path}' from {source}")


def log_template_skipped(path: str) -> None:
    """Log a partial that was already registered (first registration wins)."""
    _log_debug(f"Template '{path}' already registered, skipping")


def log_precompile_result(count: int, failed_path: Optional[str] = None) -> None:
    """Log the outcome of a precompile batch."""
    if failed_path is None:
        _log_success(f"Precompiled {count} templates")
    else:
        _log_error(f"Precompile failed at '{failed_path}' after {count} templates")

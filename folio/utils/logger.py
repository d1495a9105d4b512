"""
Generic logger setup utilities.

One log directory per CLI session: a DEBUG file sink for the full record and an
INFO console sink on stderr, so stdout stays free for rendered output.
Context-specific wrappers should be defined in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Any, Mapping, Optional

from loguru import logger

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str, log_dir: Path, provenance: Optional[Mapping[str, Any]] = None
) -> Path:
    """
    Replace the loguru sinks with a session log file and a console sink.

    Args:
        context_name: Context identifier, used as the log file name (e.g., "render")
        log_dir: Directory for this logging session
        provenance: Key-value pairs written under the session header

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    _write_session_header(provenance or {})
    return log_file


def _write_session_header(provenance: Mapping[str, Any]) -> None:
    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    for key, value in provenance.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)

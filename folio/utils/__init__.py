"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logger configuration for CLI sessions
"""

from folio.utils.logger import setup_logger

__all__ = ["setup_logger"]

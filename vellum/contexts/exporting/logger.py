"""
Exporting context logger.

Provides logging interface for exporting context with automatic [export] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[export]"


def _log_debug(message: str) -> None:
    """Log debug message with [export] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [export] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def log_export_result(fmt: str, input_len: int, summary: str) -> None:
    """Log a completed export with a short description of its output."""
    _log_debug(f"Exported {input_len} chars as {fmt}: {summary}")

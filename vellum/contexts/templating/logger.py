"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(
    log_dir: Optional[Path] = None, template_name: str = "", console_level: str = "INFO"
) -> Optional[Path]:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session (None for console only)
        template_name: Template being processed, recorded in the provenance header
        console_level: Minimum console level ("DEBUG" shows per-stage decisions)

    Returns:
        Path to log file, or None when logging to the console only

    Example:
        from vellum.contexts.templating.logger import setup_templating_logger, _log_info

        log_file = setup_templating_logger(log_dir, template_name="profile.html")
        _log_info("Starting processing...")
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Template": template_name} if template_name else None,
        console_level=console_level,
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [template] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_process_start(template_name: str, template_len: int, data_keys: int) -> None:
    """Log start of a pipeline run."""
    _log_debug(f"Processing {template_name} ({template_len} chars, {data_keys} data keys)")


def log_stage(stage_name: str, before_len: int, after_len: int) -> None:
    """Log the size change produced by one pipeline stage."""
    delta = after_len - before_len
    _log_debug(f"Stage '{stage_name}': {before_len} -> {after_len} chars ({delta:+d})")


def log_process_result(template_name: str, output_len: int, elapsed_time: float) -> None:
    """Log pipeline completion."""
    _log_debug(f"{template_name}: processed ({output_len} chars, {elapsed_time:.3f}s)")

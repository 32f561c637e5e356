"""
Collaboration context logger.

Provides logging interface for collaboration context with automatic [collab] prefix.
All collaboration modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[collab]"


def setup_collaboration_logger(log_dir: Path) -> Path:
    """
    Setup logger for collaboration context.

    Args:
        log_dir: Directory for this session

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="collab", log_dir=log_dir)


def _log_info(message: str) -> None:
    """Log info message with [collab] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [collab] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [collab] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_conflicts(conflicts) -> None:
    """Log detected conflicts as one warning naming every conflicting field."""
    if not conflicts:
        _log_debug("No conflicting fields")
        return

    _log_warning(f"{len(conflicts)} conflicting field(s): {', '.join(c.field for c in conflicts)}")

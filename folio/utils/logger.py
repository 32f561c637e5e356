"""
Logger setup shared by the FOLIO contexts.

Each context wraps setup_logger() in its own contexts/{context}/logger.py.
A session gets a DEBUG log file plus a colourised console sink on stderr;
stdout is left to the scripts, which print rendered documents there.

Console verbosity comes from FOLIO_LOG_LEVEL (environment or .env),
defaulting to INFO.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    level_colors: Optional[Dict[str, str]] = None,
    console_level: Optional[str] = None,
) -> Path:
    """
    Route loguru output for one session to a log file and the console.

    Replaces any existing sinks, then writes a provenance header (script,
    command, working directory, Python version, extras).

    Args:
        context_name: Log file stem ("template", "collab")
        log_dir: Directory for this session; created if missing
        extra_provenance: Additional key-value pairs for the header
        level_colors: Overrides for console level colours
        console_level: Console threshold (defaults to FOLIO_LOG_LEVEL or INFO)

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="template",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"Template": "case_study_default.yaml"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"
    console_level = (console_level or os.getenv("FOLIO_LOG_LEVEL") or "INFO").upper()

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance({"Context": context_name, **(extra_provenance or {})})

    return log_file


def log_provenance(extra_context: Optional[Dict[str, str]] = None) -> None:
    """Write the session header to the current sinks."""
    logger.info("=" * 80)
    logger.info(f"Script: {sys.argv[0]}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)

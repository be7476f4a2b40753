"""
Session logging for CVGEN scripts.

Each script run gets its own directory under CVGEN_LOGS_PATH holding one
{context}.log file. The file receives every DEBUG record; the console only
shows CVGEN_LOG_LEVEL and above. Contexts wrap setup_session_logger in
contexts/{context}/logger.py and prefix their messages with a context tag.
"""

import os
import platform
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from cvgen import __version__

load_dotenv()
CONSOLE_LOG_LEVEL = os.getenv("CVGEN_LOG_LEVEL", "INFO").upper()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_session_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    console_level: Optional[str] = None,
) -> Path:
    """
    Route loguru output to a session log file and the console.

    Any handlers from an earlier call are removed, so a script can switch
    context mid-run without duplicating output.

    Args:
        context_name: Log file stem (e.g., "render", "profile", "api")
        log_dir: Session directory, created if missing
        extra_provenance: Key-value pairs added to the run header
        console_level: Minimum console level (default: CVGEN_LOG_LEVEL)

    Returns:
        Path to the log file

    Example:
        >>> setup_session_logger("render", Path("outs/logs/render_20261019_123456"),
        ...                      {"Theme": "modern"})
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=(console_level or CONSOLE_LOG_LEVEL).upper(),
        colorize=True,
    )

    header = run_header(extra_provenance)
    for line in header:
        logger.debug(line)
    logger.info(f"Logging {context_name} session to {log_file}")

    return log_file


def run_header(extra_provenance: Optional[Dict[str, str]] = None) -> list:
    """Lines describing the current run: command, cwd, versions and extras."""
    lines = [
        f"Command: {' '.join(sys.argv)}",
        f"Working directory: {Path.cwd()}",
        f"cvgen {__version__} on Python {platform.python_version()}",
    ]
    for key, value in (extra_provenance or {}).items():
        lines.append(f"{key}: {value}")
    return lines

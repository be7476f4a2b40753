"""
Profile context logger.

Provides logging interface for the profile context with automatic [profile] prefix.
All profile modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvgen.utils.logger import setup_session_logger as _setup_logger

CONTEXT_PREFIX = "[profile]"


def setup_profile_logger(log_dir: Path, operation: str = "profile") -> Path:
    """
    Setup logger for profile context.

    Args:
        log_dir: Directory for this session
        operation: Operation name for provenance ("import", "export", "validate", ...)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="profile",
        log_dir=log_dir,
        extra_provenance={"Operation": operation},
    )


# Wrapper functions with automatic [profile] prefix


def _log_info(message: str) -> None:
    """Log info message with [profile] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [profile] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [profile] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [profile] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [profile] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_import_result(source: str, completion: int, sections: list) -> None:
    """Log a successful import with the sections it populated."""
    _log_success(f"Imported resume from {source} ({completion}% complete)")
    _log_debug(f"  Sections with content: {', '.join(sections) or 'none'}")

"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvgen.utils.logger import setup_session_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, theme_id: str = "") -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        theme_id: Theme requested on the command line

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Theme": theme_id or "(default)"},
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


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(theme_id: str, resume_name: str) -> None:
    """Log start of a render."""
    _log_debug(f"Rendering '{resume_name or '(unnamed)'}' with theme '{theme_id}'")


def log_render_result(document, elapsed_time: float) -> None:
    """
    Log render result.

    Args:
        document: RenderedDocument returned by render_resume()
        elapsed_time: Time taken in seconds
    """
    sections = ", ".join(s.value for s in document.sections) or "none"
    _log_debug(
        f"Rendered {len(document.html)} chars with theme '{document.theme_id}' "
        f"({elapsed_time * 1000:.1f}ms); sections: {sections}"
    )

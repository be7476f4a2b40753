"""
Persistence context logger.

Provides logging interface for persistence context with automatic [api] prefix.
All persistence modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from cvgen.utils.logger import setup_session_logger as _setup_logger

CONTEXT_PREFIX = "[api]"


def setup_persistence_logger(log_dir: Path, base_url: str = "", command: str = "") -> Path:
    """
    Setup logger for persistence context.

    Args:
        log_dir: Directory for this session
        base_url: API base URL in use
        command: CLI command being run

    Returns:
        Path to log file
    """
    provenance = {"API": base_url or "(default)"}
    if command:
        provenance["Operation"] = command
    return _setup_logger(context_name="api", log_dir=log_dir, extra_provenance=provenance)


# Wrapper functions with automatic [api] prefix


def _log_info(message: str) -> None:
    """Log info message with [api] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [api] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [api] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [api] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [api] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level persistence-specific logging helpers


def log_request(method: str, endpoint: str, authenticated: bool) -> None:
    """Log an outgoing request."""
    auth = "bearer" if authenticated else "anonymous"
    _log_debug(f"{method} {endpoint} ({auth})")


def log_response(method: str, endpoint: str, response, elapsed_time: float) -> None:
    """
    Log the outcome of a request.

    Args:
        method: HTTP method
        endpoint: Request path
        response: ApiResponse returned to the caller
        elapsed_time: Time taken in seconds
    """
    timing = f"{elapsed_time * 1000:.0f}ms"
    if response.ok:
        _log_debug(f"{method} {endpoint} -> {response.status} ({timing})")
    elif response.status == 0:
        _log_warning(f"{method} {endpoint} -> network error: {response.error} ({timing})")
    else:
        _log_warning(f"{method} {endpoint} -> {response.status}: {response.error} ({timing})")


def log_state_transition(from_state, event, to_state) -> None:
    """Log an auto-save state machine transition."""
    _log_debug(f"autosave {from_state.name} --{event.name}--> {to_state.name}")

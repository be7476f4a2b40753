"""Timestamp formatting utilities."""

from datetime import datetime, timezone
from typing import Optional


def now() -> str:
    """Compact local timestamp for session directories (e.g. "20261019_154210")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def parse_api_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp as returned by the API.

    Accepts a trailing "Z" for UTC. Naive timestamps are assumed to be UTC.

    Returns:
        Timezone-aware datetime, or None if the value cannot be parsed
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(
    iso_timestamp: str, relative: bool = False, reference: Optional[datetime] = None
) -> str:
    """
    Format an API timestamp to a readable form.

    Args:
        iso_timestamp: RFC 3339 timestamp string
        relative: If True, show relative time (e.g., "2h ago")
                 If False, show absolute UTC time (e.g., "2026-10-19 18:45")
        reference: Point in time relative output is measured from (default: now)

    Returns:
        Human-readable timestamp, or the original string if it cannot be parsed

    Examples:
        format_timestamp("2026-10-19T18:45:40Z")
        # "2026-10-19 18:45"

        format_timestamp("2026-10-19T18:45:40Z", relative=True)
        # "2h ago"
    """
    dt = parse_api_timestamp(iso_timestamp)
    if dt is None:
        return iso_timestamp

    if relative:
        return _format_relative_time(dt, reference or datetime.now(timezone.utc))
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M")


def _format_relative_time(dt: datetime, reference: datetime) -> str:
    """
    Format datetime as relative time in compact format.

    - Seconds: "30s ago"
    - Minutes: "15m ago"
    - Hours: "2h ago"
    - Days: "5d ago"
    """
    diff = reference - dt

    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"

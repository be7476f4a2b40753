"""
Field Formatting

Shared helpers every theme uses to turn resume fields into display text.
All helpers are pure and forgiving: missing values produce empty strings and
unparseable dates are passed through verbatim, never raised.
"""

import re
from typing import Iterable, Optional
from urllib.parse import urlsplit

from cvgen.contexts.profile.json_resume import Location

PRESENT = "Present"
DATE_RANGE_SEPARATOR = "–"  # en dash

# Fixed en-US month names: output must not depend on the process locale
# Link targets emitted as href; anything else renders as plain text
LINK_SCHEMES = ("http", "https", "mailto", "tel")

MONTHS_SHORT = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTHS_LONG = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
MONTH_STYLES = {"short": MONTHS_SHORT, "long": MONTHS_LONG}

# YYYY, YYYY-MM, YYYY-MM-DD, optionally followed by an ISO time and offset
DATE_REGEX = re.compile(
    r"^(?P<year>\d{4})"
    r"(?:-(?P<month>\d{2})"
    r"(?:-(?P<day>\d{2})"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?"
    r")?)?$"
)

DAYS_IN_MONTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def format_date(date_str: Optional[str], month_style: str = "short") -> str:
    """
    Format a resume date as month and year.

    Args:
        date_str: Date string ("2020", "2020-01", "2020-01-15", or an ISO datetime)
        month_style: "short" ("Jan 2020") or "long" ("January 2020")

    Returns:
        Formatted date, "" for a missing date, or the input verbatim if it
        cannot be parsed

    Examples:
        format_date("2020-01")         # "Jan 2020"
        format_date("2020", "long")    # "January 2020"
        format_date("Summer 2019")     # "Summer 2019"
    """
    if not date_str:
        return ""

    text = date_str.strip()
    match = DATE_REGEX.match(text)
    if not match:
        return date_str

    month = int(match.group("month") or 1)
    if not 1 <= month <= 12:
        return date_str

    day = match.group("day")
    if day is not None and not 1 <= int(day) <= DAYS_IN_MONTH[month - 1]:
        return date_str

    names = MONTH_STYLES.get(month_style, MONTHS_SHORT)
    return f"{names[month - 1]} {match.group('year')}"


def format_date_range(
    start_date: Optional[str], end_date: Optional[str], month_style: str = "short"
) -> str:
    """
    Format a start/end pair as a date range.

    An absent end date means the entry is ongoing and renders as "Present".
    When both dates are absent the range is empty (no lone dash).

    Examples:
        format_date_range("2020-01", None)          # "Jan 2020 – Present"
        format_date_range("2019-06", "2021-03")     # "Jun 2019 – Mar 2021"
        format_date_range(None, None)               # ""
    """
    if not start_date and not end_date:
        return ""

    start = format_date(start_date, month_style)
    end = format_date(end_date, month_style) if end_date else PRESENT
    return f"{start} {DATE_RANGE_SEPARATOR} {end}".strip()


def join_names(items: Iterable[Optional[str]], separator: str = ", ") -> str:
    """Join the non-empty strings of items with separator."""
    return separator.join(item.strip() for item in items if item and item.strip())


def format_location(
    location: Optional[Location], parts: Iterable[str] = ("city", "region", "country_code")
) -> str:
    """
    Format a basics location as a single line.

    Args:
        location: Location record (may be None)
        parts: Location attributes to include, in order

    Returns:
        Comma-separated non-empty parts, or "" when there are none
    """
    if location is None:
        return ""
    return join_names(getattr(location, part) for part in parts)


def format_degree(study_type: Optional[str], area: Optional[str]) -> str:
    """
    Format an education degree line.

    Examples:
        format_degree("BSc", "Physics")   # "BSc in Physics"
        format_degree("BSc", None)        # "BSc"
        format_degree(None, "Physics")    # "Physics"
    """
    study_type = (study_type or "").strip()
    area = (area or "").strip()
    if study_type and area:
        return f"{study_type} in {area}"
    return study_type or area


def safe_url(url: Optional[str]) -> Optional[str]:
    """
    Return url if it is usable as a link target, else None.

    Only absolute http, https, mailto and tel URLs qualify; javascript:,
    data: and scheme-less values are rendered as text instead of links.
    """
    url = (url or "").strip()
    if not url:
        return None
    try:
        scheme = urlsplit(url).scheme.lower()
    except ValueError:
        return None
    return url if scheme in LINK_SCHEMES else None

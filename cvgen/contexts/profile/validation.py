"""
Field-level resume validation.

Mirrors the checks the CV API applies on save, so problems can be reported
before a round trip. Validation is advisory: renderers never call it and
accept any value.
"""

import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from cvgen.contexts.profile.exceptions import ResumeValidationError
from cvgen.contexts.profile.json_resume import JSONResume

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^[\d\s\-+().]+$")
DATE_PATTERN = re.compile(r"^\d{4}(-\d{2})?(-\d{2})?$")

# (list attribute, JSON key, entry attributes holding dates, whether entries carry a url)
_DATED_SECTIONS = (
    ("work", "work", ("start_date", "end_date"), True),
    ("volunteer", "volunteer", ("start_date", "end_date"), True),
    ("education", "education", ("start_date", "end_date"), True),
    ("projects", "projects", ("start_date", "end_date"), True),
    ("certificates", "certificates", ("date",), True),
    ("publications", "publications", ("release_date",), True),
    ("awards", "awards", ("date",), False),
)

_JSON_NAMES = {
    "start_date": "startDate",
    "end_date": "endDate",
    "release_date": "releaseDate",
    "date": "date",
}


@dataclass(frozen=True)
class ValidationIssue:
    """
    A single failed check.

    Attributes:
        path: JSON path of the field (e.g. "work[1].startDate")
        message: What is wrong with the value
    """

    path: str
    message: str


def _check_url(value: Optional[str], path: str) -> Optional[ValidationIssue]:
    if not value:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return ValidationIssue(path, "invalid URL format")
    return None


def _check_date(value: Optional[str], path: str) -> Optional[ValidationIssue]:
    if not value:
        return None
    if not DATE_PATTERN.match(value):
        return ValidationIssue(path, "invalid date format (expected YYYY, YYYY-MM or YYYY-MM-DD)")
    return None


def validate_resume(resume: JSONResume) -> List[ValidationIssue]:
    """
    Run every field check over a resume.

    Args:
        resume: Resume to check

    Returns:
        List of issues, empty when the resume is valid
    """
    issues = []

    basics = resume.basics
    if basics is not None:
        if basics.email and not EMAIL_PATTERN.match(basics.email):
            issues.append(ValidationIssue("basics.email", "invalid email format"))
        if basics.phone and not PHONE_PATTERN.match(basics.phone):
            issues.append(ValidationIssue("basics.phone", "invalid phone format"))
        issues.append(_check_url(basics.url, "basics.url"))
        for i, profile in enumerate(basics.profiles):
            issues.append(_check_url(profile.url, f"basics.profiles[{i}].url"))

    for attribute, json_key, date_attributes, has_url in _DATED_SECTIONS:
        for i, entry in enumerate(getattr(resume, attribute)):
            prefix = f"{json_key}[{i}]"
            if has_url:
                issues.append(_check_url(entry.url, f"{prefix}.url"))
            for date_attribute in date_attributes:
                issues.append(
                    _check_date(
                        getattr(entry, date_attribute),
                        f"{prefix}.{_JSON_NAMES[date_attribute]}",
                    )
                )

    return [issue for issue in issues if issue is not None]


def ensure_valid_resume(resume: JSONResume) -> None:
    """
    Raise if the resume fails any check.

    Raises:
        ResumeValidationError: Carrying every issue found
    """
    issues = validate_resume(resume)
    if issues:
        raise ResumeValidationError(issues)

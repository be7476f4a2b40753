"""Custom exceptions for the profile context."""

from typing import List, Optional


class InvalidResumeStructureError(ValueError):
    """
    Exception raised when a resume document does not match the JSON-Resume shape.

    Attributes:
        message: Error description
        path: Location of the offending value (e.g. "work[2].highlights")
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class UnknownSectionError(ValueError):
    """Exception raised when a string does not name one of the resume sections."""

    def __init__(self, value: str, valid: List[str]):
        self.value = value
        self.valid = valid
        super().__init__(f"Unknown section '{value}'. Valid sections: {', '.join(valid)}")


class ResumeImportError(ValueError):
    """
    Exception raised when an imported resume document cannot be read.

    The current profile is never modified when this is raised.
    """

    pass


class ResumeValidationError(ValueError):
    """
    Exception raised when a resume fails field-level validation.

    Attributes:
        issues: List of ValidationIssue describing every failed check
    """

    def __init__(self, issues):
        self.issues = list(issues)
        lines = [f"Resume failed validation ({len(self.issues)} issue(s)):"]
        lines.extend(f"  - {issue.path}: {issue.message}" for issue in self.issues)
        super().__init__("\n".join(lines))

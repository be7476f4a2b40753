"""
Shared utilities for CVGEN.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamp formatting
"""

from cvgen.utils.timestamp import format_timestamp, now

__all__ = ["format_timestamp", "now"]

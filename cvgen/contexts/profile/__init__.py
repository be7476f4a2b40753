"""
Profile Context

Responsibilities:
- Represents the master profile as a JSON-Resume document
- Owns the ordered section registry and the per-section content predicate
- Derives profile completion and the visibility-filtered copy used for rendering
- Imports and exports JSON-Resume files losslessly
- Validates field formats before a save

Owns: Resume data model, section registry, import/export
Never: Talks to the network or decides how a section looks
"""

from cvgen.contexts.profile.exceptions import (
    InvalidResumeStructureError,
    ResumeImportError,
    ResumeValidationError,
    UnknownSectionError,
)
from cvgen.contexts.profile.json_resume import JSONResume, create_empty_json_resume
from cvgen.contexts.profile.sections import (
    RESUME_SECTIONS,
    SectionId,
    SectionInfo,
    calculate_profile_completion,
    get_section_info,
    parse_section_id,
    section_has_content,
    sections_with_content,
)
from cvgen.contexts.profile.serialization import (
    export_resume_json,
    import_resume_json,
    load_resume,
    save_resume,
)
from cvgen.contexts.profile.validation import ValidationIssue, ensure_valid_resume, validate_resume
from cvgen.contexts.profile.visibility import SectionVisibility, filter_hidden_sections

__all__ = [
    # Data model
    "JSONResume",
    "create_empty_json_resume",
    # Section registry and derived state
    "RESUME_SECTIONS",
    "SectionId",
    "SectionInfo",
    "get_section_info",
    "parse_section_id",
    "section_has_content",
    "sections_with_content",
    "calculate_profile_completion",
    "SectionVisibility",
    "filter_hidden_sections",
    # Import/export
    "export_resume_json",
    "import_resume_json",
    "load_resume",
    "save_resume",
    # Validation
    "ValidationIssue",
    "validate_resume",
    "ensure_valid_resume",
    # Exceptions
    "InvalidResumeStructureError",
    "ResumeImportError",
    "ResumeValidationError",
    "UnknownSectionError",
]

"""
Section Registry

Ordered, closed set of resume sections. Registry order drives navigation,
render order, and the completion calculation; it must not change without a
migration of stored per-CV section settings.

Adding a section means adding one SectionId member, one RESUME_SECTIONS entry,
one SECTION_PREDICATES entry, and one section template under
cvgen/contexts/rendering/templates/sections/. The consistency checks at the
bottom of this module fail at import time if the first three drift apart.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List

from cvgen.contexts.profile.exceptions import UnknownSectionError
from cvgen.contexts.profile.json_resume import JSONResume


class SectionId(str, Enum):
    BASICS = "basics"
    WORK = "work"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATES = "certificates"
    AWARDS = "awards"
    PUBLICATIONS = "publications"
    LANGUAGES = "languages"
    VOLUNTEER = "volunteer"
    INTERESTS = "interests"
    REFERENCES = "references"


@dataclass(frozen=True)
class SectionInfo:
    """
    Navigation entry for a resume section.

    Attributes:
        id: Stable section identifier
        label: Display label for navigation and section toggles
        icon: Icon name used by the navigation sidebar
    """

    id: SectionId
    label: str
    icon: str


RESUME_SECTIONS = (
    SectionInfo(SectionId.BASICS, "Basic Info", "user"),
    SectionInfo(SectionId.WORK, "Work Experience", "briefcase"),
    SectionInfo(SectionId.EDUCATION, "Education", "academic-cap"),
    SectionInfo(SectionId.SKILLS, "Skills", "sparkles"),
    SectionInfo(SectionId.PROJECTS, "Projects", "folder"),
    SectionInfo(SectionId.CERTIFICATES, "Certificates", "badge-check"),
    SectionInfo(SectionId.AWARDS, "Awards", "trophy"),
    SectionInfo(SectionId.PUBLICATIONS, "Publications", "book-open"),
    SectionInfo(SectionId.LANGUAGES, "Languages", "globe"),
    SectionInfo(SectionId.VOLUNTEER, "Volunteer", "heart"),
    SectionInfo(SectionId.INTERESTS, "Interests", "star"),
    SectionInfo(SectionId.REFERENCES, "References", "users"),
)

_SECTION_INFO: Dict[SectionId, SectionInfo] = {info.id: info for info in RESUME_SECTIONS}


def _basics_has_content(resume: JSONResume) -> bool:
    basics = resume.basics
    return bool(basics and (basics.name or basics.email))


def _list_has_content(attribute: str) -> Callable[[JSONResume], bool]:
    def predicate(resume: JSONResume) -> bool:
        return len(getattr(resume, attribute) or []) > 0

    return predicate


# List sections share their attribute name with the section id
SECTION_PREDICATES: Dict[SectionId, Callable[[JSONResume], bool]] = {
    SectionId.BASICS: _basics_has_content,
    **{
        section: _list_has_content(section.value)
        for section in SectionId
        if section is not SectionId.BASICS
    },
}


def get_section_info(section_id: SectionId) -> SectionInfo:
    """Get the navigation entry for a section."""
    return _SECTION_INFO[section_id]


def parse_section_id(value) -> SectionId:
    """
    Convert a string (CLI argument, URL segment) to a SectionId.

    Args:
        value: Section identifier string, or an existing SectionId

    Returns:
        Matching SectionId

    Raises:
        UnknownSectionError: If value does not name a section
    """
    if isinstance(value, SectionId):
        return value
    try:
        return SectionId(str(value).strip().lower())
    except ValueError:
        raise UnknownSectionError(str(value), [s.value for s in SectionId]) from None


def section_has_content(resume: JSONResume, section_id: SectionId) -> bool:
    """
    Check whether a section of the resume has content.

    basics has content iff its name or email is non-empty; every other section
    has content iff its list is non-empty.

    Raises:
        TypeError: If section_id is not a SectionId
    """
    if not isinstance(section_id, SectionId):
        raise TypeError(
            f"section_id must be a SectionId, got {type(section_id).__name__}; "
            f"use parse_section_id() to convert strings"
        )
    return SECTION_PREDICATES[section_id](resume)


def sections_with_content(resume: JSONResume) -> List[SectionId]:
    """Sections that have content, in registry order."""
    return [info.id for info in RESUME_SECTIONS if section_has_content(resume, info.id)]


def calculate_profile_completion(resume: JSONResume) -> int:
    """
    Percentage of sections that have content, rounded half up.

    Returns:
        Integer in [0, 100]
    """
    completed = len(sections_with_content(resume))
    total = len(RESUME_SECTIONS)
    # Integer arithmetic for round-half-up (round() would use banker's rounding)
    return (200 * completed + total) // (2 * total)


if [info.id for info in RESUME_SECTIONS] != list(SectionId):
    raise RuntimeError("RESUME_SECTIONS must list every SectionId exactly once, in enum order")
if set(SECTION_PREDICATES) != set(SectionId):
    raise RuntimeError("SECTION_PREDICATES must define a predicate for every SectionId")

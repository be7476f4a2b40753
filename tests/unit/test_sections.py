"""Unit tests for the section registry, content predicate and profile completion."""

import pytest

from cvgen.contexts.profile import (
    RESUME_SECTIONS,
    JSONResume,
    SectionId,
    UnknownSectionError,
    calculate_profile_completion,
    get_section_info,
    parse_section_id,
    section_has_content,
    sections_with_content,
)

# One minimal entry per list section
SECTION_ENTRIES = {
    SectionId.WORK: {"name": "Acme"},
    SectionId.EDUCATION: {"institution": "MIT"},
    SectionId.SKILLS: {"name": "Python"},
    SectionId.PROJECTS: {"name": "cvgen"},
    SectionId.CERTIFICATES: {"name": "CKA"},
    SectionId.AWARDS: {"title": "Best Paper"},
    SectionId.PUBLICATIONS: {"name": "On Caches"},
    SectionId.LANGUAGES: {"language": "German"},
    SectionId.VOLUNTEER: {"organization": "Red Cross"},
    SectionId.INTERESTS: {"name": "Climbing"},
    SectionId.REFERENCES: {"name": "John Roe"},
}


@pytest.mark.unit
def test_registry_order_and_labels():
    """Test the registry lists all twelve sections in navigation order."""
    assert [info.id.value for info in RESUME_SECTIONS] == [
        "basics",
        "work",
        "education",
        "skills",
        "projects",
        "certificates",
        "awards",
        "publications",
        "languages",
        "volunteer",
        "interests",
        "references",
    ]
    assert get_section_info(SectionId.BASICS).label == "Basic Info"
    assert get_section_info(SectionId.WORK).icon == "briefcase"


@pytest.mark.unit
def test_empty_resume_has_no_content(empty_resume):
    """Test every section reports no content for an empty resume."""
    for section_id in SectionId:
        assert section_has_content(empty_resume, section_id) is False
    assert sections_with_content(empty_resume) == []
    assert calculate_profile_completion(empty_resume) == 0


@pytest.mark.unit
@pytest.mark.parametrize("section_id", list(SECTION_ENTRIES))
def test_single_populated_section_reports_content(section_id):
    """Test only the populated section reports content."""
    resume = JSONResume.from_dict({section_id.value: [SECTION_ENTRIES[section_id]]})

    assert sections_with_content(resume) == [section_id]


@pytest.mark.unit
def test_basics_content_needs_name_or_email(empty_resume):
    """Test basics has content once name or email is set."""
    empty_resume.basics.label = "Engineer"
    assert not section_has_content(empty_resume, SectionId.BASICS)

    empty_resume.basics.email = "jane@x.com"
    assert section_has_content(empty_resume, SectionId.BASICS)


@pytest.mark.unit
def test_section_has_content_rejects_strings(empty_resume):
    """Test raw strings are rejected instead of silently matching nothing."""
    with pytest.raises(TypeError):
        section_has_content(empty_resume, "work")


@pytest.mark.unit
def test_parse_section_id():
    """Test parsing section ids from CLI-style strings."""
    assert parse_section_id("work") is SectionId.WORK
    assert parse_section_id(" Skills ") is SectionId.SKILLS
    assert parse_section_id(SectionId.AWARDS) is SectionId.AWARDS


@pytest.mark.unit
def test_parse_section_id_unknown():
    """Test unknown section names list the valid ones."""
    with pytest.raises(UnknownSectionError) as exc_info:
        parse_section_id("hobbies")

    assert "hobbies" in str(exc_info.value)
    assert "interests" in str(exc_info.value)


@pytest.mark.unit
def test_completion_rounds_half_up(sample_resume):
    """Test completion for basics + work + skills is 3 of 12 sections."""
    assert sections_with_content(sample_resume) == [
        SectionId.BASICS,
        SectionId.WORK,
        SectionId.SKILLS,
    ]
    assert calculate_profile_completion(sample_resume) == 25


@pytest.mark.unit
def test_completion_values():
    """Test completion for one, six and twelve populated sections."""
    basics_only = JSONResume.from_dict({"basics": {"name": "Jane Doe"}})
    assert calculate_profile_completion(basics_only) == 8  # 8.33

    half = JSONResume.from_dict(
        {"basics": {"name": "Jane Doe"}, **{s.value: [e] for s, e in list(SECTION_ENTRIES.items())[:5]}}
    )
    assert calculate_profile_completion(half) == 50

    full = JSONResume.from_dict(
        {"basics": {"name": "Jane Doe"}, **{s.value: [e] for s, e in SECTION_ENTRIES.items()}}
    )
    assert calculate_profile_completion(full) == 100


@pytest.mark.unit
def test_completion_is_monotonic(empty_resume):
    """Test adding sections never lowers completion."""
    previous = calculate_profile_completion(empty_resume)
    for section_id, entry in SECTION_ENTRIES.items():
        populated = JSONResume.from_dict({section_id.value: [entry]})
        setattr(empty_resume, section_id.value, getattr(populated, section_id.value))
        current = calculate_profile_completion(empty_resume)
        assert current >= previous
        previous = current


@pytest.mark.unit
def test_clearing_only_section_drops_completion_to_zero():
    """Test removing the only populated section drops completion to 0."""
    resume = JSONResume.from_dict({"skills": [{"name": "Python"}]})
    assert calculate_profile_completion(resume) > 0

    resume.skills = []
    assert calculate_profile_completion(resume) == 0

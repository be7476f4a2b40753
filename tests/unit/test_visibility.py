"""Unit tests for per-CV section visibility."""

import pytest

from cvgen.contexts.profile import SectionId, SectionVisibility, filter_hidden_sections, sections_with_content


@pytest.mark.unit
def test_filter_hides_list_sections(sample_resume):
    """Test hidden sections are emptied in the copy only."""
    filtered = filter_hidden_sections(sample_resume, [SectionId.SKILLS])

    assert filtered.skills == []
    assert len(sample_resume.skills) == 1
    assert sections_with_content(filtered) == [SectionId.BASICS, SectionId.WORK]


@pytest.mark.unit
def test_filter_accepts_strings(sample_resume):
    """Test section names are parsed."""
    filtered = filter_hidden_sections(sample_resume, ["work"])
    assert filtered.work == []


@pytest.mark.unit
def test_basics_cannot_be_hidden(sample_resume):
    """Test hiding basics is ignored."""
    filtered = filter_hidden_sections(sample_resume, [SectionId.BASICS])
    assert filtered.basics == sample_resume.basics


@pytest.mark.unit
def test_filtered_copy_shares_no_state(sample_resume):
    """Test mutating the filtered copy leaves the source intact."""
    filtered = filter_hidden_sections(sample_resume, [])
    filtered.work[0].name = "Changed"

    assert sample_resume.work[0].name == "Acme"


@pytest.mark.unit
def test_toggle():
    """Test toggling flips a section between hidden and shown."""
    visibility = SectionVisibility()

    assert visibility.toggle(SectionId.REFERENCES) is True
    assert visibility.is_hidden("references")
    assert visibility.toggle("references") is False
    assert visibility.hidden == frozenset()


@pytest.mark.unit
def test_apply(sample_resume):
    """Test apply() returns the filtered copy."""
    visibility = SectionVisibility(["skills", "work"])
    filtered = visibility.apply(sample_resume)

    assert sections_with_content(filtered) == [SectionId.BASICS]

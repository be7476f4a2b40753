"""Unit tests for the JSONResume data model."""

import pytest

from cvgen.contexts.profile import InvalidResumeStructureError, JSONResume, create_empty_json_resume
from cvgen.contexts.profile.json_resume import Basics, Work


@pytest.mark.unit
def test_create_empty_json_resume():
    """Test the empty resume initializes every composite field."""
    resume = create_empty_json_resume()

    assert resume.basics.name == ""
    assert resume.basics.email == ""
    assert resume.basics.profiles == []
    assert resume.basics.location.city == ""
    assert resume.basics.location.country_code == ""
    assert resume.work == []
    assert resume.references == []
    assert resume.projects == []


@pytest.mark.unit
def test_camel_case_keys_map_to_attributes():
    """Test JSON-Resume camelCase keys load into snake_case attributes."""
    resume = JSONResume.from_dict(
        {
            "basics": {"name": "Jane Doe", "location": {"countryCode": "DE", "postalCode": "10115"}},
            "work": [{"name": "Acme", "startDate": "2021-01", "endDate": "2022-02"}],
            "education": [{"institution": "MIT", "studyType": "BSc"}],
            "publications": [{"name": "On Caches", "releaseDate": "2020-05"}],
        }
    )

    assert resume.basics.location.country_code == "DE"
    assert resume.basics.location.postal_code == "10115"
    assert resume.work[0].start_date == "2021-01"
    assert resume.work[0].end_date == "2022-02"
    assert resume.education[0].study_type == "BSc"
    assert resume.publications[0].release_date == "2020-05"


@pytest.mark.unit
def test_to_dict_uses_json_resume_keys():
    """Test serialization writes camelCase keys and omits unset scalars."""
    resume = JSONResume(basics=Basics(name="Jane Doe"), work=[Work(name="Acme", start_date="2021-01")])
    data = resume.to_dict()

    assert data["basics"] == {"name": "Jane Doe", "email": "", "profiles": []}
    assert data["work"] == [{"name": "Acme", "startDate": "2021-01", "highlights": []}]
    assert data["skills"] == []


@pytest.mark.unit
def test_round_trip_preserves_document(sample_resume):
    """Test from_dict(to_dict(resume)) reproduces the resume."""
    assert JSONResume.from_dict(sample_resume.to_dict()) == sample_resume


@pytest.mark.unit
def test_round_trip_empty_resume():
    """Test the empty resume survives a round trip."""
    resume = create_empty_json_resume()
    assert JSONResume.from_dict(resume.to_dict()) == resume


@pytest.mark.unit
def test_array_order_is_preserved():
    """Test entries keep their document order."""
    resume = JSONResume.from_dict({"work": [{"name": "B"}, {"name": "A"}, {"name": "C"}]})
    assert [job.name for job in resume.work] == ["B", "A", "C"]


@pytest.mark.unit
def test_unknown_keys_are_ignored():
    """Test keys outside the schema do not fail the load."""
    resume = JSONResume.from_dict({"meta": {"theme": "x"}, "work": [{"name": "Acme", "team": "core"}]})
    assert resume.work[0].name == "Acme"


@pytest.mark.unit
def test_numbers_are_coerced_to_strings():
    """Test numeric scores and years load as strings."""
    resume = JSONResume.from_dict({"education": [{"institution": "MIT", "score": 3.9, "startDate": 2015}]})

    assert resume.education[0].score == "3.9"
    assert resume.education[0].start_date == "2015"


@pytest.mark.unit
def test_null_lists_become_empty():
    """Test null list values load as empty lists."""
    resume = JSONResume.from_dict({"work": None, "skills": [{"name": "Go", "keywords": None}]})

    assert resume.work == []
    assert resume.skills[0].keywords == []


@pytest.mark.unit
def test_null_name_and_email_load_as_defaults():
    """Test null for a field with an empty-string default survives a round-trip."""
    resume = JSONResume.from_dict({"basics": {"name": None, "email": None, "label": None}})

    assert resume.basics.name == ""
    assert resume.basics.email == ""
    assert resume.basics.label is None
    assert JSONResume.from_dict(resume.to_dict()) == resume


@pytest.mark.unit
@pytest.mark.parametrize(
    "data, path",
    [
        ({"work": {"name": "Acme"}}, "resume.work"),
        ({"work": [{"highlights": "fast"}]}, "resume.work[0].highlights"),
        ({"basics": {"name": True}}, "resume.basics.name"),
        ({"skills": ["Python"]}, "resume.skills[0]"),
    ],
)
def test_wrong_types_raise_with_path(data, path):
    """Test structural errors name the offending location."""
    with pytest.raises(InvalidResumeStructureError) as exc_info:
        JSONResume.from_dict(data)

    assert exc_info.value.path == path
    assert path in str(exc_info.value)


@pytest.mark.unit
def test_copy_is_independent(sample_resume):
    """Test copy() shares no mutable state."""
    clone = sample_resume.copy()
    clone.work[0].highlights.append("New")

    assert clone != sample_resume
    assert len(sample_resume.work[0].highlights) == 2

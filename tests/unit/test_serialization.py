"""Unit tests for JSON-Resume import and export."""

import json

import pytest

from cvgen.contexts.profile import (
    ResumeImportError,
    export_resume_json,
    import_resume_json,
    load_resume,
    save_resume,
)


@pytest.mark.unit
def test_export_then_import_is_lossless(sample_resume):
    """Test import(export(resume)) == resume."""
    assert import_resume_json(export_resume_json(sample_resume)) == sample_resume


@pytest.mark.unit
def test_export_is_plain_json_resume(sample_resume):
    """Test the export is the document itself, not a wrapper object."""
    data = json.loads(export_resume_json(sample_resume))

    assert data["basics"]["name"] == "Jane Doe"
    assert data["work"][0]["startDate"] == "2021-01"
    assert set(data) >= {"basics", "work", "skills"}


@pytest.mark.unit
def test_export_keeps_non_ascii():
    """Test non-ASCII text is written as-is."""
    resume = import_resume_json('{"basics": {"name": "Zoë Müller"}}')
    assert "Zoë Müller" in export_resume_json(resume)


@pytest.mark.unit
def test_import_invalid_json():
    """Test malformed JSON raises ResumeImportError."""
    with pytest.raises(ResumeImportError, match="Invalid JSON format"):
        import_resume_json('{"basics": ')


@pytest.mark.unit
def test_import_non_object():
    """Test a JSON array is rejected."""
    with pytest.raises(ResumeImportError, match="JSON object"):
        import_resume_json("[]")


@pytest.mark.unit
def test_import_wrong_structure():
    """Test structural errors are reported as import errors."""
    with pytest.raises(ResumeImportError, match="resume.work"):
        import_resume_json('{"work": "Acme"}')


@pytest.mark.unit
def test_save_and_load(tmp_path, sample_resume):
    """Test saving creates parent directories and loads back identically."""
    path = save_resume(sample_resume, tmp_path / "nested" / "profile.json")

    assert path.exists()
    assert load_resume(path) == sample_resume


@pytest.mark.unit
def test_load_missing_file(tmp_path):
    """Test loading a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_resume(tmp_path / "missing.json")


@pytest.mark.unit
def test_failed_import_leaves_current_resume_untouched(tmp_path, sample_resume):
    """Test a failed load does not modify the resume held by the caller."""
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    before = sample_resume.copy()

    with pytest.raises(ResumeImportError):
        sample_resume = load_resume(broken)

    assert sample_resume == before

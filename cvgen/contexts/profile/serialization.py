"""
JSON import and export of resume documents.

Exported files are the JSON-Resume document verbatim (no wrapper object), so
they can be exchanged with other JSON-Resume tools. Import is all-or-nothing:
a malformed document raises ResumeImportError and nothing else changes.
"""

import json
from pathlib import Path

from cvgen.contexts.profile.exceptions import InvalidResumeStructureError, ResumeImportError
from cvgen.contexts.profile.json_resume import JSONResume
from cvgen.contexts.profile.logger import _log_debug, _log_info, log_import_result
from cvgen.contexts.profile.sections import calculate_profile_completion, sections_with_content


def export_resume_json(resume: JSONResume, indent: int = 2) -> str:
    """
    Serialize a resume to JSON-Resume text.

    Args:
        resume: Resume to export
        indent: JSON indentation (None for compact output)

    Returns:
        JSON string
    """
    return json.dumps(resume.to_dict(), indent=indent, ensure_ascii=False)


def import_resume_json(text: str) -> JSONResume:
    """
    Parse JSON-Resume text.

    Args:
        text: JSON document

    Returns:
        Materialized JSONResume (every list section present)

    Raises:
        ResumeImportError: If the text is not valid JSON or not a resume object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        _log_debug(f"JSON decode failed at line {e.lineno}, column {e.colno}: {e.msg}")
        raise ResumeImportError("Invalid JSON format") from e

    if not isinstance(data, dict):
        raise ResumeImportError(
            f"Resume must be a JSON object, got {type(data).__name__}"
        )

    try:
        return JSONResume.from_dict(data)
    except InvalidResumeStructureError as e:
        raise ResumeImportError(f"Invalid resume structure: {e}") from e


def save_resume(resume: JSONResume, path: Path) -> Path:
    """
    Write a resume to a .json file, creating parent directories.

    Returns:
        Path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_resume_json(resume) + "\n", encoding="utf-8")
    _log_info(f"Exported resume to {path}")
    return path


def load_resume(path: Path) -> JSONResume:
    """
    Read a resume from a .json file.

    Raises:
        FileNotFoundError: If path does not exist
        ResumeImportError: If the file is not a valid resume document
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume file not found: {path}")

    resume = import_resume_json(path.read_text(encoding="utf-8"))
    log_import_result(
        str(path),
        calculate_profile_completion(resume),
        [s.value for s in sections_with_content(resume)],
    )
    return resume

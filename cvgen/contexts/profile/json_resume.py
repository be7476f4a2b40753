"""
JSON Resume Data Structure

Defines the structured representation of a JSON-Resume document
(https://jsonresume.org/schema/). This structure is the interface between the
Profile, Rendering and Persistence contexts.

Attribute names are snake_case; the camelCase JSON key of each field is kept in
the dataclass field metadata so documents round-trip without loss:

    JSONResume.from_dict(resume.to_dict()) == resume

Scalar fields default to None and are omitted from to_dict() when None.
List fields always default to an empty list and are always emitted.
"""

import copy
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, List, Optional

from cvgen.contexts.profile.exceptions import InvalidResumeStructureError


def _text(json_key: Optional[str] = None, default: Optional[str] = None):
    """Optional string field, serialized under json_key when it differs from the name."""
    metadata = {"json": json_key} if json_key else {}
    return field(default=default, metadata=metadata)


def _strings(json_key: Optional[str] = None):
    """Ordered list of strings."""
    metadata = {"kind": "strings"}
    if json_key:
        metadata["json"] = json_key
    return field(default_factory=list, metadata=metadata)


def _records(record_type: type, json_key: Optional[str] = None):
    """Ordered list of nested records."""
    metadata = {"kind": "records", "type": record_type}
    if json_key:
        metadata["json"] = json_key
    return field(default_factory=list, metadata=metadata)


def _record(record_type: type):
    """Optional nested record."""
    return field(default=None, metadata={"kind": "record", "type": record_type})


def _coerce_text(value: Any, path: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise InvalidResumeStructureError("expected a string, got a boolean", path)
    if isinstance(value, (int, float)):
        # Numeric scores and years show up in hand-written documents
        return str(value)
    raise InvalidResumeStructureError(f"expected a string, got {type(value).__name__}", path)


class _Record:
    """Mixin providing dict conversion driven by dataclass field metadata."""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = ""):
        """
        Build a record from its JSON dictionary.

        Args:
            data: Parsed JSON object
            path: Location of this record, used in error messages

        Returns:
            Record instance (unknown keys are ignored)

        Raises:
            InvalidResumeStructureError: If a value has the wrong JSON type
        """
        path = path or cls.__name__
        if not isinstance(data, dict):
            raise InvalidResumeStructureError(
                f"expected an object, got {type(data).__name__}", path
            )

        values = {}
        for f in fields(cls):
            key = f.metadata.get("json", f.name)
            if key not in data:
                continue
            raw = data[key]
            field_path = f"{path}.{key}"
            kind = f.metadata.get("kind")

            if kind == "strings":
                values[f.name] = _read_string_list(raw, field_path)
            elif kind == "records":
                values[f.name] = _read_record_list(f.metadata["type"], raw, field_path)
            elif kind == "record":
                values[f.name] = (
                    None if raw is None else f.metadata["type"].from_dict(raw, field_path)
                )
            elif raw is None and f.default is not None:
                # null for a field with a non-null default means "not set"
                continue
            else:
                values[f.name] = _coerce_text(raw, field_path)

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict using JSON-Resume key names."""
        result = {}
        for f in fields(self):
            key = f.metadata.get("json", f.name)
            value = getattr(self, f.name)
            kind = f.metadata.get("kind")

            if kind == "strings":
                result[key] = list(value)
            elif kind == "records":
                result[key] = [item.to_dict() for item in value]
            elif value is None:
                continue
            elif is_dataclass(value):
                result[key] = value.to_dict()
            else:
                result[key] = value
        return result

    def copy(self):
        """Deep copy of the record."""
        return copy.deepcopy(self)


def _read_string_list(raw: Any, path: str) -> List[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidResumeStructureError(f"expected a list, got {type(raw).__name__}", path)
    items = []
    for i, item in enumerate(raw):
        if item is None:
            continue
        items.append(_coerce_text(item, f"{path}[{i}]"))
    return items


def _read_record_list(record_type: type, raw: Any, path: str) -> list:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidResumeStructureError(f"expected a list, got {type(raw).__name__}", path)
    return [record_type.from_dict(item, f"{path}[{i}]") for i, item in enumerate(raw)]


@dataclass
class Location(_Record):
    address: Optional[str] = _text()
    postal_code: Optional[str] = _text("postalCode")
    city: Optional[str] = _text()
    country_code: Optional[str] = _text("countryCode")
    region: Optional[str] = _text()


@dataclass
class Profile(_Record):
    """Social or professional network profile (e.g. GitHub, LinkedIn)."""

    network: Optional[str] = _text()
    username: Optional[str] = _text()
    url: Optional[str] = _text()


@dataclass
class Basics(_Record):
    """
    Personal details shown in the document header.

    name and email are the only fields needed for meaningful output; they
    default to empty strings so a materialized profile always carries them.
    """

    name: str = _text(default="")
    email: str = _text(default="")
    label: Optional[str] = _text()
    image: Optional[str] = _text()
    phone: Optional[str] = _text()
    url: Optional[str] = _text()
    summary: Optional[str] = _text()
    location: Optional[Location] = _record(Location)
    profiles: List[Profile] = _records(Profile)


@dataclass
class Work(_Record):
    name: Optional[str] = _text()
    position: Optional[str] = _text()
    url: Optional[str] = _text()
    start_date: Optional[str] = _text("startDate")
    end_date: Optional[str] = _text("endDate")
    summary: Optional[str] = _text()
    highlights: List[str] = _strings()
    location: Optional[str] = _text()


@dataclass
class Volunteer(_Record):
    organization: Optional[str] = _text()
    position: Optional[str] = _text()
    url: Optional[str] = _text()
    start_date: Optional[str] = _text("startDate")
    end_date: Optional[str] = _text("endDate")
    summary: Optional[str] = _text()
    highlights: List[str] = _strings()


@dataclass
class Education(_Record):
    institution: Optional[str] = _text()
    url: Optional[str] = _text()
    area: Optional[str] = _text()
    study_type: Optional[str] = _text("studyType")
    start_date: Optional[str] = _text("startDate")
    end_date: Optional[str] = _text("endDate")
    score: Optional[str] = _text()
    courses: List[str] = _strings()


@dataclass
class Award(_Record):
    title: Optional[str] = _text()
    date: Optional[str] = _text()
    awarder: Optional[str] = _text()
    summary: Optional[str] = _text()


@dataclass
class Certificate(_Record):
    name: Optional[str] = _text()
    date: Optional[str] = _text()
    issuer: Optional[str] = _text()
    url: Optional[str] = _text()


@dataclass
class Publication(_Record):
    name: Optional[str] = _text()
    publisher: Optional[str] = _text()
    release_date: Optional[str] = _text("releaseDate")
    url: Optional[str] = _text()
    summary: Optional[str] = _text()


@dataclass
class Skill(_Record):
    name: Optional[str] = _text()
    level: Optional[str] = _text()
    keywords: List[str] = _strings()


@dataclass
class Language(_Record):
    language: Optional[str] = _text()
    fluency: Optional[str] = _text()


@dataclass
class Interest(_Record):
    name: Optional[str] = _text()
    keywords: List[str] = _strings()


@dataclass
class Reference(_Record):
    name: Optional[str] = _text()
    reference: Optional[str] = _text()


@dataclass
class Project(_Record):
    name: Optional[str] = _text()
    description: Optional[str] = _text()
    highlights: List[str] = _strings()
    keywords: List[str] = _strings()
    start_date: Optional[str] = _text("startDate")
    end_date: Optional[str] = _text("endDate")
    url: Optional[str] = _text()
    roles: List[str] = _strings()
    entity: Optional[str] = _text()
    type: Optional[str] = _text()


@dataclass
class JSONResume(_Record):
    """
    Root aggregate of a JSON-Resume document.

    Every list section defaults to an empty list; basics is None until set.
    Field order matches the JSON-Resume schema, not the navigation order
    (see cvgen.contexts.profile.sections for the latter).
    """

    basics: Optional[Basics] = _record(Basics)
    work: List[Work] = _records(Work)
    volunteer: List[Volunteer] = _records(Volunteer)
    education: List[Education] = _records(Education)
    awards: List[Award] = _records(Award)
    certificates: List[Certificate] = _records(Certificate)
    publications: List[Publication] = _records(Publication)
    skills: List[Skill] = _records(Skill)
    languages: List[Language] = _records(Language)
    interests: List[Interest] = _records(Interest)
    references: List[Reference] = _records(Reference)
    projects: List[Project] = _records(Project)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = "resume") -> "JSONResume":
        return super().from_dict(data, path)


def create_empty_json_resume() -> JSONResume:
    """
    Create a resume with every composite field initialized to its empty form.

    Scalars under basics (and basics.location) are empty strings; every list
    field is an empty list.
    """
    return JSONResume(
        basics=Basics(
            name="",
            email="",
            label="",
            phone="",
            url="",
            summary="",
            location=Location(
                address="",
                postal_code="",
                city="",
                country_code="",
                region="",
            ),
            profiles=[],
        )
    )

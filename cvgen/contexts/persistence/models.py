"""
API Resource Models

Typed views of the JSON payloads returned by the CV backend. Each model has a
from_dict() factory that raises PayloadError (or InvalidResumeStructureError
for an embedded resume) when the payload has the wrong shape.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cvgen.contexts.persistence.exceptions import PayloadError
from cvgen.contexts.profile.json_resume import JSONResume, create_empty_json_resume


def _require_dict(data: Any, resource: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise PayloadError(f"expected an object, got {type(data).__name__}", resource)
    return data


def _str(data: Dict[str, Any], key: str, resource: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise PayloadError(f"'{key}' must be a string", resource)


def _int(data: Dict[str, Any], key: str, resource: str, default: Optional[int] = 0) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(f"'{key}' must be a number", resource)
    return int(value)


def _str_list(data: Dict[str, Any], key: str, resource: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise PayloadError(f"'{key}' must be a list of strings", resource)
    return list(value)


def _resume(data: Dict[str, Any], key: str) -> JSONResume:
    value = data.get(key)
    if value is None:
        return create_empty_json_resume()
    return JSONResume.from_dict(value, key)


@dataclass
class Profile:
    """
    The user's master profile.

    has_profile is False when the server has no stored profile yet; resume is
    then an empty resume ready to be filled in.
    """

    resume: JSONResume
    user_id: Optional[str] = None
    id: Optional[str] = None
    has_profile: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Profile":
        """
        Accepts the flat {id, user_id, resume_data, ...} shape as well as the
        wrapped {user_id, has_profile, profile: {...}} shape.
        """
        data = _require_dict(data, "profile")

        if "profile" in data or "has_profile" in data:
            inner = data.get("profile")
            if inner is None:
                return cls(
                    resume=create_empty_json_resume(),
                    user_id=_str(data, "user_id", "profile"),
                    has_profile=False,
                )
            profile = cls.from_dict(_require_dict(inner, "profile"))
            profile.user_id = profile.user_id or _str(data, "user_id", "profile")
            return profile

        return cls(
            resume=_resume(data, "resume_data"),
            user_id=_str(data, "user_id", "profile"),
            id=_str(data, "id", "profile"),
            has_profile=True,
            created_at=_str(data, "created_at", "profile"),
            updated_at=_str(data, "updated_at", "profile"),
        )


@dataclass
class JobAnalysis:
    """Result of matching the profile against a job description."""

    match_score: int = 0
    matching_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    relevant_experiences: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    keywords_to_include: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "JobAnalysis":
        data = _require_dict(data, "analysis")
        return cls(
            match_score=_int(data, "match_score", "analysis"),
            matching_skills=_str_list(data, "matching_skills", "analysis"),
            missing_skills=_str_list(data, "missing_skills", "analysis"),
            relevant_experiences=_str_list(data, "relevant_experiences", "analysis"),
            suggestions=_str_list(data, "suggestions", "analysis"),
            keywords_to_include=_str_list(data, "keywords_to_include", "analysis"),
        )


@dataclass
class CV:
    """A tailored CV: resume snapshot plus template and job metadata."""

    id: str
    name: str
    cv_data: JSONResume
    template_id: str = ""
    user_id: Optional[str] = None
    job_url: Optional[str] = None
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    company_name: Optional[str] = None
    match_score: Optional[int] = None
    ai_suggestions: Optional[JobAnalysis] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "CV":
        data = _require_dict(data, "cv")
        if not _str(data, "id", "cv"):
            raise PayloadError("missing 'id'", "cv")
        suggestions = data.get("ai_suggestions")
        return cls(
            id=data["id"],
            name=_str(data, "name", "cv") or "",
            cv_data=_resume(data, "cv_data"),
            template_id=_str(data, "template_id", "cv") or "",
            user_id=_str(data, "user_id", "cv"),
            job_url=_str(data, "job_url", "cv"),
            job_title=_str(data, "job_title", "cv"),
            job_description=_str(data, "job_description", "cv"),
            company_name=_str(data, "company_name", "cv"),
            match_score=_int(data, "match_score", "cv", default=None),
            ai_suggestions=JobAnalysis.from_dict(suggestions) if suggestions is not None else None,
            created_at=_str(data, "created_at", "cv"),
            updated_at=_str(data, "updated_at", "cv"),
        )


@dataclass
class CVListItem:
    id: str
    name: str
    template_id: str = ""
    user_id: Optional[str] = None
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    match_score: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "CVListItem":
        data = _require_dict(data, "cv list item")
        if not _str(data, "id", "cv list item"):
            raise PayloadError("missing 'id'", "cv list item")
        return cls(
            id=data["id"],
            name=_str(data, "name", "cv list item") or "",
            template_id=_str(data, "template_id", "cv list item") or "",
            user_id=_str(data, "user_id", "cv list item"),
            job_title=_str(data, "job_title", "cv list item"),
            company_name=_str(data, "company_name", "cv list item"),
            match_score=_int(data, "match_score", "cv list item", default=None),
            created_at=_str(data, "created_at", "cv list item"),
            updated_at=_str(data, "updated_at", "cv list item"),
        )


@dataclass
class CVListPage:
    """One page of the CV list."""

    cvs: List[CVListItem] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10
    total_pages: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "CVListPage":
        data = _require_dict(data, "cv list")
        items = data.get("cvs") or []
        if not isinstance(items, list):
            raise PayloadError("'cvs' must be a list", "cv list")
        return cls(
            cvs=[CVListItem.from_dict(item) for item in items],
            total=_int(data, "total", "cv list"),
            page=_int(data, "page", "cv list", default=1),
            page_size=_int(data, "page_size", "cv list", default=10),
            total_pages=_int(data, "total_pages", "cv list"),
        )


@dataclass
class CoverLetter:
    id: str
    content: str
    cv_id: Optional[str] = None
    user_id: Optional[str] = None
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "CoverLetter":
        data = _require_dict(data, "cover letter")
        if not _str(data, "id", "cover letter"):
            raise PayloadError("missing 'id'", "cover letter")
        return cls(
            id=data["id"],
            content=_str(data, "content", "cover letter") or "",
            cv_id=_str(data, "cv_id", "cover letter"),
            user_id=_str(data, "user_id", "cover letter"),
            job_title=_str(data, "job_title", "cover letter"),
            company_name=_str(data, "company_name", "cover letter"),
            created_at=_str(data, "created_at", "cover letter"),
            updated_at=_str(data, "updated_at", "cover letter"),
        )


@dataclass
class CoverLetterListItem:
    """Cover letter summary as returned by the list endpoint (no content)."""

    id: str
    cv_id: Optional[str] = None
    user_id: Optional[str] = None
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "CoverLetterListItem":
        data = _require_dict(data, "cover letter list item")
        if not _str(data, "id", "cover letter list item"):
            raise PayloadError("missing 'id'", "cover letter list item")
        return cls(
            id=data["id"],
            cv_id=_str(data, "cv_id", "cover letter list item"),
            user_id=_str(data, "user_id", "cover letter list item"),
            job_title=_str(data, "job_title", "cover letter list item"),
            company_name=_str(data, "company_name", "cover letter list item"),
            created_at=_str(data, "created_at", "cover letter list item"),
            updated_at=_str(data, "updated_at", "cover letter list item"),
        )

    @staticmethod
    def list_from_dict(data: Any) -> List["CoverLetterListItem"]:
        """Decode the {cover_letters: [...]} list response."""
        data = _require_dict(data, "cover letter list")
        items = data.get("cover_letters") or []
        if not isinstance(items, list):
            raise PayloadError("'cover_letters' must be a list", "cover letter list")
        return [CoverLetterListItem.from_dict(item) for item in items]


@dataclass
class Credits:
    """Generation credits; remaining counts free and paid credits together."""

    user_id: Optional[str] = None
    free_generations_used: int = 0
    free_generations_limit: int = 0
    free_generations_remaining: int = 0
    paid_credits: int = 0
    total_generations: int = 0
    remaining: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Credits":
        data = _require_dict(data, "credits")
        return cls(
            user_id=_str(data, "user_id", "credits"),
            free_generations_used=_int(data, "free_generations_used", "credits"),
            free_generations_limit=_int(data, "free_generations_limit", "credits"),
            free_generations_remaining=_int(data, "free_generations_remaining", "credits"),
            paid_credits=_int(data, "paid_credits", "credits"),
            total_generations=_int(data, "total_generations", "credits"),
            remaining=_int(data, "remaining", "credits"),
        )


@dataclass
class GeneratedCV:
    """Response of the AI CV generation endpoint."""

    cv: CV
    analysis: Optional[JobAnalysis] = None
    credits_remaining: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "GeneratedCV":
        data = _require_dict(data, "generated cv")
        raw_cv = _require_dict(data.get("cv"), "generated cv")
        if not _str(raw_cv, "id", "generated cv"):
            raise PayloadError("missing 'cv.id'", "generated cv")
        analysis = data.get("analysis")
        cv = CV(
            id=raw_cv["id"],
            name=_str(raw_cv, "name", "generated cv") or "",
            cv_data=_resume(raw_cv, "resume_data"),
            job_title=_str(raw_cv, "job_title", "generated cv"),
            company_name=_str(raw_cv, "company", "generated cv"),
            match_score=_int(raw_cv, "match_score", "generated cv", default=None),
            created_at=_str(raw_cv, "created_at", "generated cv"),
        )
        return cls(
            cv=cv,
            analysis=JobAnalysis.from_dict(analysis) if analysis is not None else None,
            credits_remaining=_int(data, "credits_remaining", "generated cv"),
        )


@dataclass
class GeneratedCoverLetter:
    """Response of the AI cover letter generation endpoint."""

    cover_letter: CoverLetter
    credits_remaining: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "GeneratedCoverLetter":
        data = _require_dict(data, "generated cover letter")
        return cls(
            cover_letter=CoverLetter.from_dict(data.get("cover_letter")),
            credits_remaining=_int(data, "credits_remaining", "generated cover letter"),
        )


@dataclass
class HealthStatus:
    status: str = ""
    time: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "HealthStatus":
        data = _require_dict(data, "health")
        return cls(status=_str(data, "status", "health") or "", time=_str(data, "time", "health"))

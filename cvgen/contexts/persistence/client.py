"""
CV Backend Client

Resource-level operations on top of ApiClient: profile, CVs, cover letters,
credits and the AI endpoints. Every method returns an ApiResponse whose data is
a typed model from cvgen.contexts.persistence.models.

Reads go through the QueryCache; successful mutations update or invalidate the
affected cache keys:

    update_cv()      -> cv key set, CV list pages invalidated
    delete_cv()      -> cv key removed, every CV key invalidated
    generate_cv()    -> CV keys and credits invalidated
"""

from typing import Any, Callable, Dict, Optional

from cvgen.contexts.persistence.api_client import ApiClient, ApiResponse, path_segment
from cvgen.contexts.persistence.cache import (
    COVER_LETTERS_KEY,
    CREDITS_KEY,
    CVS_KEY,
    PROFILE_KEY,
    QueryCache,
    cover_letter_key,
    cover_letter_list_key,
    cv_key,
    cv_list_key,
)
from cvgen.contexts.persistence.credentials import EnvTokenProvider, StaticTokenProvider
from cvgen.contexts.persistence.logger import _log_warning
from cvgen.contexts.persistence.models import (
    CV,
    CoverLetter,
    CoverLetterListItem,
    Credits,
    CVListPage,
    GeneratedCoverLetter,
    GeneratedCV,
    HealthStatus,
    JobAnalysis,
    Profile,
)
from cvgen.contexts.profile.json_resume import JSONResume
from cvgen.contexts.profile.sections import SectionId, parse_section_id

MISSING_CV_ID = "CV ID is required"
MISSING_COVER_LETTER_ID = "Cover letter ID is required"
MISSING_JOB_DESCRIPTION = "Job description is required"
MISSING_CONTENT = "Content is required"


def _decode(response: ApiResponse, parse: Callable[[Any], Any]) -> ApiResponse:
    """Replace raw JSON data with a typed model; malformed payloads become errors."""
    if not response.ok:
        return response
    try:
        return response.with_data(parse(response.data))
    except ValueError as e:
        _log_warning(f"Could not decode response: {e}")
        return ApiResponse.failure(str(e), response.status)


def _compact(body: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None values so optional fields are omitted from request bodies."""
    return {key: value for key, value in body.items() if value is not None}


def _section_payload(data: Any) -> Any:
    """JSON for one profile section: a record, a list of records, or raw JSON."""
    if isinstance(data, list):
        return [item.to_dict() if hasattr(item, "to_dict") else item for item in data]
    if hasattr(data, "to_dict"):
        return data.to_dict()
    return data


class CVGenClient:
    """
    Typed client for the CV backend.

    Args:
        api_client: Transport (base URL, credentials, session)
        cache: Query cache (default: a new QueryCache)
    """

    def __init__(self, api_client: ApiClient = None, cache: QueryCache = None):
        self.api = api_client or ApiClient()
        self.cache = cache if cache is not None else QueryCache()

    def _cached_get(self, key, endpoint: str, parse: Callable[[Any], Any], params=None) -> ApiResponse:
        return self.cache.fetch(key, lambda: _decode(self.api.get(endpoint, params=params), parse))

    # Health

    def health(self) -> ApiResponse:
        """GET /api/health (never cached)."""
        return _decode(self.api.get("/api/health"), HealthStatus.from_dict)

    # Profile

    def get_profile(self) -> ApiResponse:
        """Fetch the master profile (data: Profile)."""
        return self._cached_get(PROFILE_KEY, "/api/profile", Profile.from_dict)

    def update_profile(self, resume: JSONResume) -> ApiResponse:
        """Replace the whole profile (data: Profile)."""
        response = _decode(
            self.api.put("/api/profile", {"resume_data": resume.to_dict()}), Profile.from_dict
        )
        if response.ok:
            self.cache.set(PROFILE_KEY, response.data, response.status)
        return response

    def update_profile_section(self, section_id, data: Any) -> ApiResponse:
        """
        Replace one profile section (data: Profile).

        Args:
            section_id: SectionId or its string value
            data: Record, list of records, or raw JSON for the section
        """
        if not isinstance(section_id, SectionId):
            section_id = parse_section_id(section_id)
        response = _decode(
            self.api.patch(f"/api/profile/{section_id.value}", _section_payload(data)),
            Profile.from_dict,
        )
        if response.ok:
            self.cache.set(PROFILE_KEY, response.data, response.status)
        return response

    def delete_profile(self) -> ApiResponse:
        response = self.api.delete("/api/profile")
        if response.ok:
            self.cache.invalidate(PROFILE_KEY)
        return response

    # CVs

    def list_cvs(self, page: int = 1, page_size: int = 10) -> ApiResponse:
        """Fetch one page of CVs (data: CVListPage)."""
        return self._cached_get(
            cv_list_key(page, page_size),
            "/api/cvs",
            CVListPage.from_dict,
            params={"page": page, "page_size": page_size},
        )

    def get_cv(self, cv_id: str) -> ApiResponse:
        """Fetch one CV (data: CV)."""
        if not cv_id:
            return ApiResponse.failure(MISSING_CV_ID)
        return self._cached_get(cv_key(cv_id), f"/api/cvs/{path_segment(cv_id)}", CV.from_dict)

    def create_cv(self, name: Optional[str] = None, template_id: Optional[str] = None) -> ApiResponse:
        """Create a CV from the current profile (data: CV)."""
        response = _decode(
            self.api.post("/api/cvs", _compact({"name": name, "template_id": template_id})),
            CV.from_dict,
        )
        if response.ok:
            self.cache.invalidate(CVS_KEY)
        return response

    def update_cv(
        self,
        cv_id: str,
        name: Optional[str] = None,
        cv_data: Optional[JSONResume] = None,
        template_id: Optional[str] = None,
    ) -> ApiResponse:
        """
        Update CV fields; fields left as None are not sent (data: CV).
        """
        if not cv_id:
            return ApiResponse.failure(MISSING_CV_ID)
        body = _compact(
            {
                "name": name,
                "cv_data": cv_data.to_dict() if cv_data is not None else None,
                "template_id": template_id,
            }
        )
        response = _decode(self.api.put(f"/api/cvs/{path_segment(cv_id)}", body), CV.from_dict)
        if response.ok:
            self.cache.invalidate(CVS_KEY)
            self.cache.set(cv_key(response.data.id), response.data, response.status)
        return response

    def duplicate_cv(self, cv_id: str) -> ApiResponse:
        """Copy a CV (data: the new CV)."""
        if not cv_id:
            return ApiResponse.failure(MISSING_CV_ID)
        response = _decode(self.api.post(f"/api/cvs/{path_segment(cv_id)}/duplicate"), CV.from_dict)
        if response.ok:
            self.cache.invalidate(CVS_KEY)
        return response

    def delete_cv(self, cv_id: str) -> ApiResponse:
        if not cv_id:
            return ApiResponse.failure(MISSING_CV_ID)
        response = self.api.delete(f"/api/cvs/{path_segment(cv_id)}")
        if response.ok:
            self.cache.remove(cv_key(cv_id))
            self.cache.invalidate(CVS_KEY)
        return response

    # Cover letters

    def list_cover_letters(self) -> ApiResponse:
        """Fetch every cover letter (data: list of CoverLetterListItem)."""
        return self._cached_get(
            cover_letter_list_key(), "/api/cover-letters", CoverLetterListItem.list_from_dict
        )

    def get_cover_letter(self, cover_letter_id: str) -> ApiResponse:
        if not cover_letter_id:
            return ApiResponse.failure(MISSING_COVER_LETTER_ID)
        return self._cached_get(
            cover_letter_key(cover_letter_id),
            f"/api/cover-letters/{path_segment(cover_letter_id)}",
            CoverLetter.from_dict,
        )

    def create_cover_letter(
        self,
        content: str,
        cv_id: Optional[str] = None,
        job_title: Optional[str] = None,
        company_name: Optional[str] = None,
    ) -> ApiResponse:
        if not content:
            return ApiResponse.failure(MISSING_CONTENT)
        body = _compact(
            {"content": content, "cv_id": cv_id, "job_title": job_title, "company_name": company_name}
        )
        response = _decode(self.api.post("/api/cover-letters", body), CoverLetter.from_dict)
        if response.ok:
            self.cache.invalidate(COVER_LETTERS_KEY)
        return response

    def update_cover_letter(self, cover_letter_id: str, content: str) -> ApiResponse:
        if not cover_letter_id:
            return ApiResponse.failure(MISSING_COVER_LETTER_ID)
        response = _decode(
            self.api.put(
                f"/api/cover-letters/{path_segment(cover_letter_id)}", {"content": content}
            ),
            CoverLetter.from_dict,
        )
        if response.ok:
            self.cache.invalidate(COVER_LETTERS_KEY)
            self.cache.set(cover_letter_key(response.data.id), response.data, response.status)
        return response

    def delete_cover_letter(self, cover_letter_id: str) -> ApiResponse:
        if not cover_letter_id:
            return ApiResponse.failure(MISSING_COVER_LETTER_ID)
        response = self.api.delete(f"/api/cover-letters/{path_segment(cover_letter_id)}")
        if response.ok:
            self.cache.remove(cover_letter_key(cover_letter_id))
            self.cache.invalidate(COVER_LETTERS_KEY)
        return response

    # Credits and AI

    def get_credits(self) -> ApiResponse:
        """Fetch generation credits (data: Credits)."""
        return self._cached_get(CREDITS_KEY, "/api/credits", Credits.from_dict)

    def analyze_job(self, job_description: str) -> ApiResponse:
        """Match the profile against a job description (data: JobAnalysis)."""
        if not job_description or not job_description.strip():
            return ApiResponse.failure(MISSING_JOB_DESCRIPTION)
        response = self.api.post("/api/ai/analyze-job", {"job_description": job_description})
        return _decode(
            response,
            lambda data: JobAnalysis.from_dict(data.get("analysis") if isinstance(data, dict) else data),
        )

    def generate_cv(
        self,
        job_description: str,
        cv_name: Optional[str] = None,
        job_title: Optional[str] = None,
        company_name: Optional[str] = None,
        job_url: Optional[str] = None,
    ) -> ApiResponse:
        """Generate a tailored CV from the profile (data: GeneratedCV)."""
        if not job_description or not job_description.strip():
            return ApiResponse.failure(MISSING_JOB_DESCRIPTION)
        body = _compact(
            {
                "job_description": job_description,
                "cv_name": cv_name or "",
                "job_title": job_title,
                "company_name": company_name,
                "job_url": job_url,
            }
        )
        response = _decode(self.api.post("/api/ai/generate-cv", body), GeneratedCV.from_dict)
        if response.ok:
            self.cache.invalidate(CVS_KEY)
            self.cache.invalidate(CREDITS_KEY)
        return response

    def generate_cover_letter(
        self,
        job_title: str,
        company_name: str,
        cv_id: Optional[str] = None,
        job_description: Optional[str] = None,
    ) -> ApiResponse:
        """Generate a cover letter for a job (data: GeneratedCoverLetter)."""
        body = _compact(
            {
                "job_title": job_title,
                "company_name": company_name,
                "cv_id": cv_id,
                "job_description": job_description,
            }
        )
        response = _decode(
            self.api.post("/api/ai/generate-cover-letter", body), GeneratedCoverLetter.from_dict
        )
        if response.ok:
            self.cache.invalidate(COVER_LETTERS_KEY)
            self.cache.invalidate(CREDITS_KEY)
        return response


def create_client(
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
) -> CVGenClient:
    """
    Build a client for command-line use.

    An explicit token wins; otherwise CVGEN_API_TOKEN is read on every request.
    """
    credentials = StaticTokenProvider(token) if token else EnvTokenProvider()
    return CVGenClient(ApiClient(base_url, credentials, timeout=timeout))

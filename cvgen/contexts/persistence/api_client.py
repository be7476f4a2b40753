"""
API Client

Thin JSON-over-HTTP wrapper around the CV backend.

Every call returns an ApiResponse instead of raising: transport failures
come back with status 0, HTTP failures with the server's status and message.

Example:
    >>> client = ApiClient(credentials=EnvTokenProvider())
    >>> response = client.get("/api/profile")
    >>> response.ok, response.status
    (True, 200)
"""

import json
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from dotenv import load_dotenv

from cvgen.contexts.persistence.credentials import AnonymousProvider, CredentialProvider
from cvgen.contexts.persistence.logger import log_request, log_response

load_dotenv()
API_URL = os.getenv("CVGEN_API_URL", "http://localhost:8080")

UNAUTHORIZED_MESSAGE = "Unauthorized - please sign in again"
REQUEST_FAILED_MESSAGE = "Request failed"
INVALID_JSON_MESSAGE = "Invalid JSON response"
NETWORK_ERROR_MESSAGE = "Network error"


@dataclass
class ApiResponse:
    """
    Tri-state result of an API call.

    Attributes:
        data: Decoded JSON body (or a typed model) on success, else None
        error: Error message on failure, else None
        status: HTTP status code, or 0 when the request never completed
    """

    data: Any = None
    error: Optional[str] = None
    status: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status < 300

    @classmethod
    def failure(cls, error: str, status: int = 0) -> "ApiResponse":
        return cls(data=None, error=error, status=status)

    def with_data(self, data: Any) -> "ApiResponse":
        """Copy of a successful response carrying different data."""
        return ApiResponse(data=data, error=self.error, status=self.status)


def path_segment(value: str) -> str:
    """Quote a resource id for use as a single path segment."""
    return quote(str(value), safe="")


def _error_message(data: Any) -> str:
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if message:
            return str(message)
    return REQUEST_FAILED_MESSAGE


class ApiClient:
    """
    Sends JSON requests to the CV backend with bearer credentials.

    Args:
        base_url: API root (default: CVGEN_API_URL, else http://localhost:8080)
        credentials: Token provider asked before every request
        session: requests-compatible session (injected in tests)
        timeout: Per-request timeout in seconds; None waits indefinitely
    """

    def __init__(
        self,
        base_url: str = None,
        credentials: CredentialProvider = None,
        session: requests.Session = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or API_URL).rstrip("/")
        self.credentials = credentials or AnonymousProvider()
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self.credentials.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _decode(self, response: requests.Response) -> ApiResponse:
        status = response.status_code

        if status == 401:
            return ApiResponse.failure(UNAUTHORIZED_MESSAGE, 401)

        text = response.text
        data = None
        if text and text.strip():
            try:
                data = json.loads(text)
            except ValueError:
                return ApiResponse.failure(INVALID_JSON_MESSAGE, status)

        if not 200 <= status < 300:
            return ApiResponse.failure(_error_message(data), status)

        return ApiResponse(data=data, error=None, status=status)

    def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method
            endpoint: Path starting with "/" (e.g., "/api/cvs")
            body: JSON-serializable request body (omitted when None)
            params: Query parameters

        Returns:
            ApiResponse (never raises for network or HTTP failures)
        """
        headers = self._headers()
        log_request(method, endpoint, "Authorization" in headers)
        start_time = time.perf_counter()

        try:
            response = self.session.request(
                method,
                f"{self.base_url}{endpoint}",
                headers=headers,
                data=json.dumps(body) if body is not None else None,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            result = ApiResponse.failure(str(e) or NETWORK_ERROR_MESSAGE, 0)
        else:
            result = self._decode(response)

        log_response(method, endpoint, result, time.perf_counter() - start_time)
        return result

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, body: Any = None) -> ApiResponse:
        return self.request("POST", endpoint, body=body)

    def put(self, endpoint: str, body: Any = None) -> ApiResponse:
        return self.request("PUT", endpoint, body=body)

    def patch(self, endpoint: str, body: Any = None) -> ApiResponse:
        return self.request("PATCH", endpoint, body=body)

    def delete(self, endpoint: str) -> ApiResponse:
        return self.request("DELETE", endpoint)

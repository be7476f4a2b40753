"""Shared fixtures: sample resumes, a fake HTTP session and a manual clock."""

import json
from collections import deque

import pytest
import requests

from cvgen.contexts.profile import JSONResume, create_empty_json_resume

SAMPLE_RESUME = {
    "basics": {
        "name": "Jane Doe",
        "email": "jane@x.com",
        "label": "Backend Engineer",
        "phone": "+1 555 0100",
        "url": "https://jane.dev",
        "summary": "Engineer focused on reliable services.",
        "location": {"city": "Berlin", "countryCode": "DE"},
        "profiles": [
            {"network": "GitHub", "username": "janedoe", "url": "https://github.com/janedoe"}
        ],
    },
    "work": [
        {
            "name": "Acme",
            "position": "Engineer",
            "startDate": "2021-01",
            "highlights": ["Cut p99 latency by 40%", "Led the storage migration"],
        },
        {
            "name": "Globex",
            "position": "Junior Engineer",
            "location": "Remote",
            "startDate": "2019-06",
            "endDate": "2021-03",
        },
    ],
    "skills": [{"name": "Python"}],
}


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.text = text


class FakeSession:
    """
    Records requests and replays queued responses in order.

    Queue a requests.RequestException instance to simulate a transport failure.
    """

    def __init__(self):
        self.calls = []
        self.responses = deque()

    def queue(self, status_code=200, body=None, text=None):
        self.responses.append(FakeResponse(status_code, body, text))
        return self

    def queue_error(self, error=None):
        self.responses.append(error or requests.ConnectionError("Connection refused"))
        return self

    def request(self, method, url, headers=None, data=None, params=None, timeout=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": headers or {},
                "body": json.loads(data) if data is not None else None,
                "params": params,
                "timeout": timeout,
            }
        )
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response


class ManualClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def sample_resume():
    """Jane Doe resume: basics, two work entries and one skill without keywords."""
    return JSONResume.from_dict(SAMPLE_RESUME)


@pytest.fixture
def minimal_resume():
    return JSONResume.from_dict(
        {
            "basics": {"name": "Jane Doe", "email": "jane@x.com"},
            "work": [{"name": "Acme", "position": "Engineer", "startDate": "2021-01"}],
        }
    )


@pytest.fixture
def empty_resume():
    return create_empty_json_resume()


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def clock():
    return ManualClock()

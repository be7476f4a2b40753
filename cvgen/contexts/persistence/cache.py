"""
Query Cache

In-memory cache of successful API reads, keyed by tuples such as
("api", "cvs", cv_id). Mutations invalidate by key prefix, so
invalidate(("api", "cvs")) drops every CV detail and list page at once.
"""

import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from dotenv import load_dotenv

from cvgen.contexts.persistence.api_client import ApiResponse
from cvgen.contexts.persistence.logger import _log_debug

load_dotenv()
CACHE_STALE_SECONDS = float(os.getenv("CVGEN_CACHE_STALE_SECONDS", "300"))

CacheKey = Tuple[Any, ...]

# Query keys
PROFILE_KEY: CacheKey = ("api", "profile")
CREDITS_KEY: CacheKey = ("api", "credits")
CVS_KEY: CacheKey = ("api", "cvs")
COVER_LETTERS_KEY: CacheKey = ("api", "coverLetters")


def cv_key(cv_id: str) -> CacheKey:
    return CVS_KEY + (cv_id,)


def cv_list_key(page: int, page_size: int) -> CacheKey:
    return CVS_KEY + ("list", page, page_size)


def cover_letter_key(cover_letter_id: str) -> CacheKey:
    return COVER_LETTERS_KEY + (cover_letter_id,)


def cover_letter_list_key() -> CacheKey:
    return COVER_LETTERS_KEY + ("list",)


def is_retryable(response: ApiResponse) -> bool:
    """Transport failures and server errors are retried; client errors are not."""
    return response.status == 0 or response.status >= 500


@dataclass
class CacheEntry:
    response: ApiResponse
    fetched_at: float


class QueryCache:
    """
    Cache of successful read responses with a staleness window.

    Args:
        stale_after: Seconds a cached response stays fresh
        retries: Extra attempts for a failed load (transport or 5xx only)
        clock: Monotonic time source (injected in tests)
    """

    def __init__(
        self,
        stale_after: float = CACHE_STALE_SECONDS,
        retries: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.stale_after = stale_after
        self.retries = retries
        self.clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def get(self, key: CacheKey) -> Optional[ApiResponse]:
        """Cached response for key, or None if missing or stale."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() - entry.fetched_at >= self.stale_after:
            return None
        return entry.response

    def fetch(self, key: CacheKey, loader: Callable[[], ApiResponse]) -> ApiResponse:
        """
        Return a fresh cached response or load one.

        Args:
            key: Query key
            loader: Zero-argument callable performing the request

        Returns:
            The cached or loaded ApiResponse; failures are returned but never stored
        """
        cached = self.get(key)
        if cached is not None:
            _log_debug(f"cache hit {key}")
            return cached

        response = loader()
        attempts = 0
        while not response.ok and is_retryable(response) and attempts < self.retries:
            attempts += 1
            _log_debug(f"retrying {key} after status {response.status} ({attempts}/{self.retries})")
            response = loader()

        if response.ok:
            self._store(key, response)
        return response

    def _store(self, key: CacheKey, response: ApiResponse) -> None:
        self._entries[key] = CacheEntry(response=response, fetched_at=self.clock())

    def set(self, key: CacheKey, data: Any, status: int = 200) -> None:
        """Store data under key as a fresh successful response."""
        self._store(key, ApiResponse(data=data, error=None, status=status))

    def invalidate(self, prefix: CacheKey) -> int:
        """
        Drop every entry whose key starts with prefix.

        Returns:
            Number of entries removed
        """
        size = len(prefix)
        stale = [key for key in self._entries if key[:size] == prefix]
        for key in stale:
            del self._entries[key]
        if stale:
            _log_debug(f"invalidated {len(stale)} entr{'y' if len(stale) == 1 else 'ies'} under {prefix}")
        return len(stale)

    def remove(self, key: CacheKey) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

"""
Persistence Context

Responsibilities:
- Sends authenticated JSON requests to the CV backend and returns tri-state results
- Caches reads and invalidates them after mutations
- Decodes profile, CV, cover letter, credit and AI payloads into typed models
- Debounces and coalesces edits into saves through an explicit state machine

Owns: HTTP transport, credentials, query cache, resource models, auto-save
Never: Signs users in, renders documents, or raises for network/HTTP failures
"""

from cvgen.contexts.persistence.api_client import ApiClient, ApiResponse
from cvgen.contexts.persistence.autosave import (
    AutoSaveMachine,
    DebouncedSaver,
    SaveEvent,
    SaveState,
    TRANSITIONS,
)
from cvgen.contexts.persistence.cache import QueryCache
from cvgen.contexts.persistence.client import CVGenClient, create_client
from cvgen.contexts.persistence.credentials import (
    AnonymousProvider,
    CredentialProvider,
    EnvTokenProvider,
    StaticTokenProvider,
)
from cvgen.contexts.persistence.exceptions import InvalidTransitionError, PayloadError
from cvgen.contexts.persistence.models import (
    CV,
    CoverLetter,
    CoverLetterListItem,
    Credits,
    CVListItem,
    CVListPage,
    GeneratedCoverLetter,
    GeneratedCV,
    HealthStatus,
    JobAnalysis,
    Profile,
)

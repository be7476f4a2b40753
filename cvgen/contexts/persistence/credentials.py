"""
Credential Providers

The API client never handles sign-in. It asks an injected provider for a
bearer token before every request; None means signed out, and the request
is sent without an Authorization header.
"""

import os
from abc import ABC, abstractmethod
from typing import Optional

from dotenv import load_dotenv

load_dotenv()
TOKEN_ENV_VAR = "CVGEN_API_TOKEN"


class CredentialProvider(ABC):
    """Source of bearer tokens for the API client."""

    @abstractmethod
    def get_token(self) -> Optional[str]:
        """Return the current bearer token, or None when signed out."""


class StaticTokenProvider(CredentialProvider):
    """Always returns the token it was created with."""

    def __init__(self, token: Optional[str]):
        self.token = token or None

    def get_token(self) -> Optional[str]:
        return self.token


class EnvTokenProvider(CredentialProvider):
    """
    Reads the token from an environment variable on every call,
    so a rotated token is picked up without restarting.
    """

    def __init__(self, var: str = TOKEN_ENV_VAR):
        self.var = var

    def get_token(self) -> Optional[str]:
        token = os.getenv(self.var, "").strip()
        return token or None


class AnonymousProvider(CredentialProvider):
    """Signed-out provider; requests are sent without credentials."""

    def get_token(self) -> Optional[str]:
        return None

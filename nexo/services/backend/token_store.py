"""Credential holders injected into the backend clients."""
from __future__ import annotations

import logging
from typing import Protocol


logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    """Read side of the session credentials, as seen by the API clients."""

    def get_token(self) -> str | None: ...

    def get_user_id(self) -> str | None: ...


class InMemoryTokenStore:
    """Process-local token store. Empty strings are treated as absent."""

    def __init__(self, token: str | None = None, user_id: str | None = None) -> None:
        self._token = token or None
        self._user_id = user_id or None

    def get_token(self) -> str | None:
        return self._token

    def get_user_id(self) -> str | None:
        return self._user_id

    def save_token(self, token: str) -> None:
        self._token = token or None
        logger.info("Auth token saved")

    def save_user_id(self, user_id: str) -> None:
        self._user_id = user_id or None

    def clear(self) -> None:
        self._token = None
        self._user_id = None
        logger.info("Auth token cleared")

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

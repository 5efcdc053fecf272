"""Shared request plumbing for the NEXO REST backend."""
from __future__ import annotations

import logging
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from nexo.config import Settings, get_settings
from nexo.errors import DecodeError, TransportError, Unauthenticated, UpstreamError
from nexo.models.backend import ApiErrorEnvelope
from nexo.services.backend.token_store import TokenStore


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BackendClient:
    """Authenticated JSON-over-HTTPS calls against ``settings.api_base_url``."""

    def __init__(
        self,
        token_store: TokenStore,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.token_store = token_store
        self.settings = settings or get_settings()
        self._client = client

    def endpoint(self, path: str) -> str:
        return f"{self.settings.api_base_url}/{path.lstrip('/')}"

    def _headers(self, require_auth: bool, multipart: bool = False) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if not multipart:
            headers["Content-Type"] = "application/json"

        token = self.token_store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        elif require_auth:
            raise Unauthenticated()
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        auth: bool = True,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        failure_message: str | None = None,
    ) -> httpx.Response:
        """Issue one request; raise for missing auth, transport failures and non-2xx."""

        headers = self._headers(auth, multipart=files is not None)
        url = self.endpoint(path)
        try:
            response = await self._request(method, url, headers=headers, json=json, params=params, files=files)
        except httpx.HTTPError as err:
            logger.warning("%s %s failed: %s", method, url, type(err).__name__)
            raise TransportError() from err

        logger.debug("%s %s -> %d", method, url, response.status_code)
        if not response.is_success:
            raise self._error_for(response, failure_message)
        return response

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        kwargs = {key: value for key, value in kwargs.items() if value is not None}
        if self._client is not None:
            return await self._client.request(method, url, **kwargs)

        async with httpx.AsyncClient(timeout=self.settings.request_timeout_seconds) as client:
            return await client.request(method, url, **kwargs)

    @staticmethod
    def _error_for(response: httpx.Response, failure_message: str | None) -> UpstreamError:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        envelope = ApiErrorEnvelope.from_payload(payload)
        if envelope is not None:
            logger.warning("Backend error %d: %s", response.status_code, envelope.user_message)
            return UpstreamError(
                envelope.status_code or response.status_code,
                envelope.user_message,
                envelope.error_type,
            )

        body = response.text.strip()
        logger.warning("Backend error %d without an error message", response.status_code)
        return UpstreamError(response.status_code, failure_message or body or None)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as err:
            raise DecodeError() from err

    @classmethod
    def _decode(cls, model: type[ModelT], response: httpx.Response) -> ModelT:
        payload = cls._json(response)
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise DecodeError()
        try:
            return model.model_validate(payload)
        except ValidationError as err:
            raise DecodeError() from err

    @classmethod
    def _decode_list(cls, model: type[ModelT], response: httpx.Response) -> list[ModelT]:
        payload = cls._json(response)
        if not isinstance(payload, list):
            raise DecodeError()
        try:
            return [model.model_validate(item) for item in payload if isinstance(item, dict)]
        except ValidationError as err:
            raise DecodeError() from err

"""HTTPS client for the Gemini generateContent endpoint."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from nexo.config import Settings, get_settings
from nexo.errors import EmptyCompletion, MissingCredential, TransportError, UpstreamError


logger = logging.getLogger(__name__)

GENERATION_CONFIG: dict[str, Any] = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 2048,
}

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)
SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"


def build_payload(prompt: str) -> dict[str, Any]:
    """Wrap ``prompt`` in the generateContent request envelope."""

    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": dict(GENERATION_CONFIG),
        "safetySettings": [
            {"category": category, "threshold": SAFETY_THRESHOLD} for category in SAFETY_CATEGORIES
        ],
    }


def extract_text(payload: Any) -> str:
    """Return the first candidate's text, or raise EmptyCompletion."""

    if not isinstance(payload, dict):
        raise EmptyCompletion()
    candidates = payload.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        raise EmptyCompletion()

    content = candidates[0].get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    texts = [part.get("text") for part in parts or [] if isinstance(part, dict)]
    text = "".join(item for item in texts if isinstance(item, str))
    if not text.strip():
        finish_reason = candidates[0].get("finishReason")
        logger.warning("Gemini candidate had no text (finishReason=%s)", finish_reason)
        raise EmptyCompletion()
    return text


class GeminiClient:
    """Single-shot completion calls. No retries; failures surface to the caller."""

    def __init__(self, settings: Settings | None = None, client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings or get_settings()
        self._client = client

    @property
    def endpoint(self) -> str:
        return f"{self.settings.gemini_base_url}/{self.settings.gemini_model}:generateContent"

    async def generate(self, prompt: str) -> str:
        """POST ``prompt`` and return the raw completion text."""

        if not self.settings.is_gemini_configured:
            raise MissingCredential()

        try:
            response = await self._post(build_payload(prompt))
        except httpx.HTTPError as err:
            # The request URL carries the API key, so only the error type is logged.
            logger.warning("Gemini request failed: %s", type(err).__name__)
            raise TransportError() from err

        logger.info("Gemini API response status: %d", response.status_code)
        if response.status_code != 200:
            logger.warning("Gemini API error %d: %s", response.status_code, response.text[:500])
            raise UpstreamError(response.status_code, self._error_message(response))

        try:
            payload = response.json()
        except ValueError as err:
            raise EmptyCompletion() from err
        return extract_text(payload)

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        params = {"key": self.settings.gemini_api_key}
        headers = {"Content-Type": "application/json"}
        if self._client is not None:
            return await self._client.post(self.endpoint, params=params, json=payload, headers=headers)

        async with httpx.AsyncClient(timeout=self.settings.request_timeout_seconds) as client:
            return await client.post(self.endpoint, params=params, json=payload, headers=headers)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        default = f"Gemini API error with status code: {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            return default
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        return default

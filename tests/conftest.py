"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ["GEMINI_API_KEY"] = os.environ.get("GEMINI_API_KEY") or "test-gemini-key"
os.environ["API_BASE_URL"] = "https://api.test"
os.environ["LOG_DIR"] = os.environ.get("LOG_DIR") or str(Path(tempfile.gettempdir()) / "nexo-test-logs")

from nexo.logging_config import configure_logging

configure_logging()

from nexo.config import Settings
from nexo.main import app

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(scope="session")
def test_client() -> TestClient:
    """Provide a FastAPI test client."""

    return TestClient(app)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings with a usable Gemini key and a fake backend host."""

    return Settings(
        gemini_api_key="test-key",
        api_base_url="https://api.test/",
        log_dir=tmp_path / "logs",
    )


@pytest.fixture()
def recorded() -> list[httpx.Request]:
    """Requests seen by the mock transport, in order."""

    return []


@pytest.fixture()
def mock_http(recorded: list[httpx.Request]) -> Callable[[Handler], httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by ``handler`` and recorded."""

    def factory(handler: Handler) -> httpx.AsyncClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))

    return factory

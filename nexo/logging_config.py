"""Logging setup shared by the API server and the command-line scripts.

Everything goes to stderr and to ``<log_dir>/nexo.log`` in one format.
"""
from __future__ import annotations

from logging.config import dictConfig
from pathlib import Path

from pydantic import ValidationError

from nexo.config import get_settings

LOG_FILENAME = "nexo.log"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_configured = False


def _default_config(log_dir: Path, level: str) -> dict:
    log_path = log_dir / LOG_FILENAME
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
            "file": {
                "class": "logging.FileHandler",
                "filename": str(log_path),
                "encoding": "utf-8",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {
            # httpx logs every request URL at INFO, which would leak the Gemini key query parameter.
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
        "root": {
            "level": level,
            "handlers": ["console", "file"],
        },
    }


def configure_logging() -> None:
    """Install the handlers; later calls in the same process do nothing."""

    global _configured
    if _configured:
        return

    try:
        settings = get_settings()
        log_dir = settings.log_dir
        level = settings.log_level
    except ValidationError:
        # Settings may be incomplete when a script runs without a .env file.
        log_dir = Path("logs")
        level = "INFO"
    log_dir.mkdir(parents=True, exist_ok=True)

    dictConfig(_default_config(log_dir, level))
    _configured = True

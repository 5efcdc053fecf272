"""Run the NEXO Coach API with uvicorn."""
from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from nexo.config import get_settings
from nexo.logging_config import configure_logging


def main() -> None:
    configure_logging()
    settings = get_settings()
    uvicorn.run(
        "nexo.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()

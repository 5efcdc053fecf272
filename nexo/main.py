"""FastAPI application entry point."""
from fastapi import FastAPI

from nexo import __version__
from nexo.logging_config import configure_logging
from nexo.routers import recommendations


configure_logging()

app = FastAPI(title="NEXO Coach API", version=__version__)


@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Simple health probe for liveness checks."""
    return {"status": "ok"}


app.include_router(recommendations.router)

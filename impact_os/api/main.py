"""
impact_os.api.main — FastAPI application entry point
=====================================================

Run with::

    uvicorn impact_os.api.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from impact_os import __version__  # noqa: E402
from impact_os.api.deps import get_engine  # noqa: E402
from impact_os.api.routes.assessment import router as assessment_router  # noqa: E402
from impact_os.api.routes.currency import router as currency_router  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env with safe defaults.

    Priority:
      1) CORS_ALLOW_ORIGINS (comma-separated)
      2) FRONTEND_URL (single origin)
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url:
        return [frontend_url.rstrip("/")]

    return []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — warm the DB engine."""
    engine = app.dependency_overrides.get(get_engine, get_engine)()
    logger.info("Impact OS API started — engine ready (%s)", engine.url.database)
    yield
    logger.info("Impact OS API shutting down")


app = FastAPI(
    title="Impact OS Rules Engine API",
    version=__version__,
    lifespan=lifespan,
)

# CORS — allow the Next.js dev server and production frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(assessment_router, prefix="/api")
app.include_router(currency_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}

"""FastAPI application factory for the archlint host API."""

from __future__ import annotations

from fastapi import FastAPI

from archlint import __version__
from archlint.config import ArchLintConfig
from archlint.scanner.engine import ScanEngine


def create_app(config: ArchLintConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    config = config or ArchLintConfig.load()

    app = FastAPI(
        title="archlint",
        version=__version__,
        docs_url="/api/docs",
    )

    app.state.config = config
    app.state.engine = ScanEngine(workers=config.workers)

    from archlint.web.api.scans import router as scans_router

    app.include_router(scans_router, prefix="/api")

    return app

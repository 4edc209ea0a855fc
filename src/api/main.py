"""
FastAPI application entry-point.
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routers import analyze, data, share
from src.data.store import DatasetStore, ShareStore


def create_app() -> FastAPI:
    """Build an app with its own, empty, in-memory stores."""
    app = FastAPI(
        title="Tabular Insights Copilot",
        version="0.1.0",
        description="Ask free-text questions about an uploaded CSV/JSON dataset",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.dataset_store = DatasetStore()
    app.state.share_store = ShareStore()

    app.include_router(data.router, prefix="/api", tags=["Data"])
    app.include_router(share.router, prefix="/api", tags=["Share"])
    app.include_router(analyze.router, prefix="/api/ai", tags=["Insights"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()

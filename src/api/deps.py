"""
Request-scoped access to the app-owned stores.
"""
from __future__ import annotations

from fastapi import Request

from src.data.store import DatasetStore, ShareStore


def get_dataset_store(request: Request) -> DatasetStore:
    return request.app.state.dataset_store


def get_share_store(request: Request) -> ShareStore:
    return request.app.state.share_store

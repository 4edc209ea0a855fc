"""POST /share-design, GET /shared/{share_id} -- in-memory share links."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from src.api.deps import get_share_store
from src.data.errors import ShareNotFound
from src.data.store import ShareStore

router = APIRouter()


class ShareRequest(BaseModel):
    data: list[dict[str, Any]] | None = None
    columns: list[str] | None = None
    viewMode: str | None = None
    timestamp: str | None = None


@router.post("/share-design")
def share_design(req: ShareRequest, request: Request, store: ShareStore = Depends(get_share_store)) -> dict:
    if req.data is None or req.columns is None:
        raise HTTPException(status_code=400, detail="Data and columns are required")

    design = store.create(req.data, req.columns, view_mode=req.viewMode, timestamp=req.timestamp)
    base_url = request.headers.get("origin") or str(request.base_url).rstrip("/")
    return {
        "message": "Design shared successfully",
        "shareId": design.id,
        "shareUrl": f"{base_url}/shared/{design.id}",
        "expiresAt": None,
        "createdAt": design.created_at,
    }


@router.get("/shared/{share_id}")
def get_shared_design(share_id: str, store: ShareStore = Depends(get_share_store)) -> dict:
    try:
        design = store.get(share_id)
    except ShareNotFound as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message)
    return {**design.to_dict(), "message": "Shared design retrieved successfully"}

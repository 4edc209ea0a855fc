"""
POST /upload, GET /fetch-data, POST /update-row, POST /export -- dataset
management around the interpreter.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel, Field

from src.api.deps import get_dataset_store
from src.core.config import get_settings
from src.core.logging import get_logger
from src.data.errors import DataError, FileTooLarge
from src.data.parsers import parse_upload, render_export
from src.data.store import DatasetStore

logger = get_logger(__name__)
router = APIRouter()


class UpdateRowRequest(BaseModel):
    rowIndex: Any = None
    column: Any = None
    value: Any = None


class ExportRequest(BaseModel):
    data: list[dict[str, Any]] | None = None
    columns: list[str] | None = None
    format: str | None = Field(None, description="csv | json")


@router.post("/upload")
async def upload_file(
    file: UploadFile = File(...),
    store: DatasetStore = Depends(get_dataset_store),
) -> dict:
    """Parse an uploaded CSV/JSON file and make it the active dataset."""
    settings = get_settings()
    content = await file.read()

    try:
        if len(content) > settings.max_upload_mb * 1024 * 1024:
            raise FileTooLarge(f"File too large. Maximum size is {settings.max_upload_mb}MB")
        dataset = parse_upload(file.filename or "", content)
    except DataError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message)

    store.replace(dataset)
    return {
        "message": "File uploaded successfully",
        "data": dataset.rows,
        "columns": dataset.columns,
        "rowCount": dataset.row_count,
        "fileName": file.filename,
    }


@router.get("/fetch-data")
def fetch_data(store: DatasetStore = Depends(get_dataset_store)) -> dict:
    dataset = store.snapshot()
    return {
        "data": dataset.rows,
        "columns": dataset.columns,
        "rowCount": dataset.row_count,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/update-row")
def update_row(req: UpdateRowRequest, store: DatasetStore = Depends(get_dataset_store)) -> dict:
    try:
        row = store.update_cell(req.rowIndex, req.column, req.value)
    except DataError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message)
    return {
        "message": "Row updated successfully",
        "updatedRow": row,
        "rowIndex": req.rowIndex,
        "column": req.column,
        "newValue": req.value,
    }


@router.post("/export")
def export_data(req: ExportRequest, format: str | None = Query(None)) -> Response:
    """Render the posted rows as a CSV or JSON attachment."""
    if req.data is None or req.columns is None:
        raise HTTPException(status_code=400, detail="Data and columns are required")

    try:
        content, mime_type, filename = render_export(req.data, req.columns, format or req.format or "")
    except DataError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message)

    return Response(
        content=content,
        media_type=mime_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

"""POST /api/ai/analyze -- answer a free-text question about the active dataset."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.api.deps import get_dataset_store
from src.core.logging import get_logger
from src.data.store import DatasetStore
from src.interpreter.errors import AnalysisError, InternalAnalysisFailure
from src.interpreter.service import analyze, interpret, validate

logger = get_logger(__name__)
router = APIRouter()


class AnalyzeRequest(BaseModel):
    # Typed loosely on purpose: a missing or non-string question is reported
    # by the service as a 400, after the "no data" check.
    question: Any = Field(None, description="Free-text question about the dataset")


@router.post("/analyze")
def analyze_endpoint(req: AnalyzeRequest, store: DatasetStore = Depends(get_dataset_store)) -> dict:
    """question -> plan -> aggregate -> chart / SQL / narrative."""
    try:
        response = analyze(req.question, store.snapshot())
    except AnalysisError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message)
    return response.to_dict()


@router.post("/plan")
def plan_endpoint(req: AnalyzeRequest, store: DatasetStore = Depends(get_dataset_store)) -> dict:
    """Dry-run: return the IntentPlan without aggregating."""
    dataset = store.snapshot()
    try:
        validate(req.question, dataset)
    except AnalysisError as exc:
        raise HTTPException(status_code=exc.http_status, detail=exc.message)
    try:
        plan = interpret(req.question, dataset)
    except Exception as exc:
        logger.exception("Insights.plan failed")
        failure = InternalAnalysisFailure()
        raise HTTPException(status_code=failure.http_status, detail=failure.message) from exc
    return plan.model_dump(mode="json")

"""
Insights service -- orchestrates classify -> resolve -> detect -> aggregate
-> narrate -> assemble for one question over one dataset snapshot.

The dataset is passed in by the caller on every call; nothing here keeps
state between questions.
"""
from __future__ import annotations

from typing import Any

from src.core.config import get_settings
from src.core.logging import get_logger
from src.core.utils import timer
from src.interpreter import aggregator, schema, synonyms
from src.interpreter.aggregator import AggregationResult
from src.interpreter.chart_generator import suggest_chart
from src.interpreter.dataset import Dataset
from src.interpreter.errors import (
    InternalAnalysisFailure,
    InvalidQuestionError,
    NoDataLoadedError,
)
from src.interpreter.intent import detect
from src.interpreter.narrative import describe_plan, narrate
from src.interpreter.plan import IntentPlan, Operation
from src.interpreter.response import (
    AnalysisDescriptor,
    AnalysisResponse,
    ChartDescriptor,
    FilterDescriptor,
    OperationDescriptor,
    TableDescriptor,
)
from src.interpreter.sql_generator import generate_sql

logger = get_logger(__name__)


def _operation_descriptor(plan: IntentPlan) -> OperationDescriptor:
    if plan.is_time_series:
        return OperationDescriptor(
            type="time_series",
            metric_op=Operation.COUNT.value,
            limit=plan.limit,
            time_unit=plan.time_unit.value if plan.time_unit else None,
            date_column=plan.date_column,
        )
    return OperationDescriptor(
        type="group_by",
        group_by=plan.group_by,
        metric_op=plan.operation.value,
        metric_field=plan.value_column,
        limit=plan.limit,
        filter=(
            FilterDescriptor(column=plan.filter.column, equals=plan.filter.equals)
            if plan.filter is not None
            else None
        ),
    )


def assemble(plan: IntentPlan, result: AggregationResult) -> AnalysisResponse:
    """Package a plan and its result into the public response."""
    chart = suggest_chart(plan, result)
    story = narrate(plan, result)
    return AnalysisResponse(
        interpretation=describe_plan(plan),
        operation=_operation_descriptor(plan),
        table=TableDescriptor(
            columns=result.columns,
            rows=result.to_records(),
            label_column=result.label_column,
            value_column=result.value_column,
        ),
        chart=ChartDescriptor(
            type=chart.chart_type,
            x_key=chart.x_key,
            y_key=chart.y_key,
            explanation=chart.explanation,
        ),
        sql=generate_sql(plan),
        analysis=AnalysisDescriptor(**story.to_dict()),
        provider=get_settings().provider,
    )


def interpret(question: str, dataset: Dataset) -> IntentPlan:
    """Question -> IntentPlan, without executing it."""
    roles = schema.classify(dataset)
    guesses = synonyms.resolve(question, dataset.columns)
    logger.debug("Roles=%s | guesses=%s", roles.to_dict(), guesses.to_dict())
    return detect(question, roles, guesses, dataset)


def validate(question: Any, dataset: Dataset | None) -> None:
    """Reject a missing dataset first, then a missing or blank question."""
    if dataset is None or dataset.is_empty:
        raise NoDataLoadedError()
    if not isinstance(question, str) or not question.strip():
        raise InvalidQuestionError()


def analyze(question: Any, dataset: Dataset | None) -> AnalysisResponse:
    """End-to-end: question + dataset -> AnalysisResponse.

    Raises
    ------
    NoDataLoadedError
        *dataset* is missing or has no rows / columns (checked first).
    InvalidQuestionError
        *question* is missing, not a string, or blank.
    InternalAnalysisFailure
        Anything unexpected while interpreting or aggregating.
    """
    validate(question, dataset)
    logger.info("Insights.analyze | question=%s | rows=%d | columns=%d",
                question, dataset.row_count, len(dataset.columns))

    with timer() as t:
        try:
            plan = interpret(question, dataset)
            result = aggregator.run(plan, dataset)
            response = assemble(plan, result)
        except Exception as exc:
            logger.exception("Analysis failed for question=%s", question)
            raise InternalAnalysisFailure() from exc

    logger.info("Insights.analyze done | op=%s | rows=%d | %dms",
                plan.operation.value, len(result), t["elapsed_ms"])
    return response

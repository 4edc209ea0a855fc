"""
Pseudo-SQL generator -- renders an IntentPlan as an illustrative SELECT.

The statement is shown to the user next to the answer and is never
executed.  Column names are interpolated as-is; do not route this text to
a real database without parameterising it first.
"""
from __future__ import annotations

import json

from src.core.logging import get_logger
from src.interpreter.aggregator import LABEL_COLUMN, PERIOD_COLUMN, VALUE_COLUMN
from src.interpreter.plan import IntentPlan, Operation, TimeUnit

logger = get_logger(__name__)

TABLE_NAME = "tabela"

_AGG_FUNCTIONS: dict[Operation, str] = {
    Operation.SUM: "SUM",
    Operation.AVG: "AVG",
}


def _literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _time_series_sql(plan: IntentPlan) -> str:
    unit = (plan.time_unit or TimeUnit.MONTH).value
    col = json.dumps(plan.date_column, ensure_ascii=False)
    return (
        f"SELECT DATE_TRUNC('{unit}', TO_TIMESTAMP({col})) AS {PERIOD_COLUMN}, "
        f"COUNT(*) AS {VALUE_COLUMN} FROM {TABLE_NAME} GROUP BY 1 ORDER BY 1"
    )


def generate_sql(plan: IntentPlan) -> str:
    """Build the display SQL for *plan*."""
    if plan.is_time_series:
        sql = _time_series_sql(plan)
        logger.debug("Pseudo-SQL: %s", sql)
        return sql

    group = plan.group_by or ""
    if plan.operation in _AGG_FUNCTIONS:
        metric = f"{_AGG_FUNCTIONS[plan.operation]}({plan.value_column})"
    else:
        metric = "COUNT(*)"

    parts = [f"SELECT {group} AS {LABEL_COLUMN}, {metric} AS {VALUE_COLUMN} FROM {TABLE_NAME}"]
    if plan.operation == Operation.COUNT and plan.filter is not None:
        parts.append(f"WHERE {plan.filter.column} = {_literal(plan.filter.equals)}")
    parts.append(f"GROUP BY {group} ORDER BY {VALUE_COLUMN} DESC LIMIT {plan.limit}")

    sql = " ".join(parts)
    logger.debug("Pseudo-SQL: %s", sql)
    return sql

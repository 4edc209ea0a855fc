"""
Aggregation engine -- executes an IntentPlan over the in-memory rows.

Pure functions: rows are read, never modified.  Grouped results are
sorted by value descending (Python's sort is stable, so ties keep the
order in which groups were first seen); time series are sorted by their
zero-padded period key, which is chronological.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence, TypeVar

from src.core.logging import get_logger
from src.interpreter.dataset import Dataset
from src.interpreter.plan import EqualityFilter, IntentPlan, Operation, TimeUnit
from src.interpreter.values import as_date, as_label, as_number

logger = get_logger(__name__)

LABEL_COLUMN = "categoria"
PERIOD_COLUMN = "periodo"
VALUE_COLUMN = "valor"

T = TypeVar("T")


@dataclass(frozen=True)
class AggregateRow:
    label: str
    value: float | int


@dataclass
class AggregationResult:
    """Ordered aggregate rows plus the column names they are published under."""
    rows: list[AggregateRow] = field(default_factory=list)
    label_column: str = LABEL_COLUMN
    value_column: str = VALUE_COLUMN

    @property
    def columns(self) -> list[str]:
        return [self.label_column, self.value_column]

    def to_records(self) -> list[dict[str, Any]]:
        return [{self.label_column: r.label, self.value_column: r.value} for r in self.rows]

    def __len__(self) -> int:
        return len(self.rows)


def top_n(rows: Sequence[T], n: int) -> list[T]:
    """First *n* items, order preserved (negative *n* -> empty)."""
    return list(rows[: max(0, n)])


def _matches(row: dict[str, Any], flt: EqualityFilter) -> bool:
    return as_label(row.get(flt.column)).lower() == flt.equals.lower()


def _group_label(row: dict[str, Any], key: str | None) -> str:
    # No group column: every row lands in the same "" bucket
    return as_label(row.get(key)) if key is not None else ""


def group_count(
    rows: Iterable[dict[str, Any]],
    key: str | None,
    flt: EqualityFilter | None = None,
) -> list[AggregateRow]:
    counts: dict[str, int] = {}
    for row in rows:
        if flt is not None and not _matches(row, flt):
            continue
        label = _group_label(row, key)
        counts[label] = counts.get(label, 0) + 1
    out = [AggregateRow(label=k, value=v) for k, v in counts.items()]
    out.sort(key=lambda r: r.value, reverse=True)
    return out


def group_aggregate(
    rows: Iterable[dict[str, Any]],
    key: str | None,
    value_column: str,
    op: Operation,
) -> list[AggregateRow]:
    if op not in (Operation.SUM, Operation.AVG):
        raise ValueError(f"group_aggregate supports sum/avg, got '{op.value}'")

    acc: dict[str, list[float]] = {}  # label -> [sum, count]
    for row in rows:
        label = _group_label(row, key)
        value = as_number(row.get(value_column))
        bucket = acc.setdefault(label, [0.0, 0])
        bucket[0] += value if value is not None else 0.0
        bucket[1] += 1

    out = [
        AggregateRow(label=k, value=total if op == Operation.SUM else total / (n or 1))
        for k, (total, n) in acc.items()
    ]
    out.sort(key=lambda r: r.value, reverse=True)
    return out


def period_key(value: Any, unit: TimeUnit) -> str | None:
    """``YYYY`` or ``YYYY-MM`` bucket for a date cell, ``None`` if unparseable."""
    d = as_date(value)
    if d is None:
        return None
    if unit == TimeUnit.YEAR:
        return f"{d.year:04d}"
    return f"{d.year:04d}-{d.month:02d}"


def time_series_count(
    rows: Iterable[dict[str, Any]],
    date_column: str,
    unit: TimeUnit,
) -> list[AggregateRow]:
    counts: dict[str, int] = {}
    skipped = 0
    for row in rows:
        key = period_key(row.get(date_column), unit)
        if key is None:
            skipped += 1
            continue
        counts[key] = counts.get(key, 0) + 1
    if skipped:
        logger.debug("time_series_count skipped %d rows with unparseable '%s'", skipped, date_column)
    return [AggregateRow(label=k, value=counts[k]) for k in sorted(counts)]


def run(plan: IntentPlan, dataset: Dataset) -> AggregationResult:
    """Execute *plan* against *dataset*."""
    if plan.operation == Operation.TIME_SERIES:
        if plan.date_column is None:
            raise ValueError("time_series plan without a date column")
        rows = time_series_count(dataset.rows, plan.date_column, plan.time_unit or TimeUnit.MONTH)
        return AggregationResult(rows=rows, label_column=PERIOD_COLUMN)

    if plan.operation in (Operation.SUM, Operation.AVG):
        if plan.value_column is None:
            raise ValueError(f"{plan.operation.value} plan without a value column")
        rows = group_aggregate(dataset.rows, plan.group_by, plan.value_column, plan.operation)
    else:
        rows = group_count(dataset.rows, plan.group_by, plan.filter)

    return AggregationResult(rows=top_n(rows, plan.limit), label_column=LABEL_COLUMN)

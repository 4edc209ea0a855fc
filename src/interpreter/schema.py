"""
Schema classifier -- infers a semantic role for every dataset column.

A column is *numeric* / *date* when at least
``max(role_min_count, floor(role_ratio * row_count))`` of its non-empty
cells parse as such.  Categorical is everything that is not numeric, so
date columns usually appear there too; the two roles serve different
downstream decisions.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable

from src.core.config import get_settings
from src.interpreter.dataset import Dataset
from src.interpreter.values import as_date, as_number, is_empty


@dataclass(frozen=True)
class ColumnRoles:
    numeric: list[str] = field(default_factory=list)
    date: list[str] = field(default_factory=list)
    categorical: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "numeric": list(self.numeric),
            "date": list(self.date),
            "categorical": list(self.categorical),
        }


def role_threshold(row_count: int) -> int:
    settings = get_settings()
    return max(settings.role_min_count, math.floor(row_count * settings.role_ratio))


def _count_valid(values: list[Any], parse: Callable[[Any], Any]) -> int:
    return sum(1 for v in values if not is_empty(v) and parse(v) is not None)


def is_numeric_column(dataset: Dataset, column: str) -> bool:
    values = dataset.column_values(column)
    return _count_valid(values, as_number) >= role_threshold(dataset.row_count)


def is_date_column(dataset: Dataset, column: str) -> bool:
    values = dataset.column_values(column)
    return _count_valid(values, as_date) >= role_threshold(dataset.row_count)


def classify(dataset: Dataset) -> ColumnRoles:
    """Return the numeric / date / categorical column lists, in column order."""
    numeric = [c for c in dataset.columns if is_numeric_column(dataset, c)]
    dates = [c for c in dataset.columns if is_date_column(dataset, c)]
    categorical = [c for c in dataset.columns if c not in numeric]
    return ColumnRoles(numeric=numeric, date=dates, categorical=categorical)

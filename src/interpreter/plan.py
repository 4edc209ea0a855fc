"""
IntentPlan -- the structured intermediate representation between a
free-text question and the in-memory aggregation.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Operation(str, Enum):
    COUNT = "count"
    SUM = "sum"
    AVG = "avg"
    TIME_SERIES = "time_series"


class TimeUnit(str, Enum):
    YEAR = "year"
    MONTH = "month"


class EqualityFilter(BaseModel):
    """Keep only rows whose *column* equals *equals* (case-insensitive)."""

    model_config = ConfigDict(frozen=True)

    column: str
    equals: str


class IntentPlan(BaseModel):
    """Fully resolved interpretation of one question."""

    model_config = ConfigDict(frozen=True)

    operation: Operation = Field(Operation.COUNT, description="count | sum | avg | time_series")
    group_by: str | None = Field(None, description="Column used to partition rows")
    value_column: str | None = Field(None, description="Numeric column aggregated by sum/avg")
    date_column: str | None = Field(None, description="Column bucketed by time_series")
    time_unit: TimeUnit | None = Field(None, description="year | month (time_series only)")
    limit: int = Field(10, ge=0, description="Maximum grouped rows to return (clamped to MAX_LIMIT)")
    filter: EqualityFilter | None = Field(None, description="Optional equality filter (count only)")

    @property
    def is_time_series(self) -> bool:
        return self.operation == Operation.TIME_SERIES

"""
AnalysisResponse -- the payload returned for every analysed question.

Field names are snake_case in Python and camelCase on the wire
(``label_column`` -> ``labelColumn``); ``to_dict()`` gives the JSON shape.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class FilterDescriptor(_WireModel):
    column: str
    equals: str


class OperationDescriptor(_WireModel):
    type: str = Field(..., description="group_by | time_series")
    group_by: str | None = None
    metric_op: str = Field("count", description="count | sum | avg")
    metric_field: str | None = None
    limit: int = 10
    time_unit: str | None = None
    date_column: str | None = None
    filter: FilterDescriptor | None = None


class TableDescriptor(_WireModel):
    columns: list[str]
    rows: list[dict[str, Any]]
    label_column: str
    value_column: str


class ChartDescriptor(_WireModel):
    type: str
    x_key: str
    y_key: str
    explanation: str


class AnalysisDescriptor(_WireModel):
    summary: str
    insights: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class AnalysisResponse(_WireModel):
    interpretation: str
    operation: OperationDescriptor
    table: TableDescriptor
    chart: ChartDescriptor
    sql: str
    analysis: AnalysisDescriptor
    provider: str

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

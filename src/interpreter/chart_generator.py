"""
Chart recommendation.

Two chart types only:
  - line  (time series: period on x, occurrence count on y)
  - bar   (every grouped count / sum / avg)

The axes always mirror the result table's label and value columns.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.interpreter.aggregator import AggregationResult
from src.interpreter.plan import IntentPlan, TimeUnit

CHART_BAR = "bar"
CHART_LINE = "line"

_BAR_EXPLANATION = "Gráfico de barras permite comparação fácil entre categorias."
_LINE_EXPLANATIONS: dict[TimeUnit, str] = {
    TimeUnit.YEAR: "Série temporal anual de ocorrências",
    TimeUnit.MONTH: "Série temporal mensal de ocorrências",
}


@dataclass(frozen=True)
class ChartSpec:
    """Describes how the result table should be visualised."""
    chart_type: str
    x_key: str
    y_key: str
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.chart_type,
            "xKey": self.x_key,
            "yKey": self.y_key,
            "explanation": self.explanation,
        }


def suggest_chart(plan: IntentPlan, result: AggregationResult) -> ChartSpec:
    if plan.is_time_series:
        return ChartSpec(
            chart_type=CHART_LINE,
            x_key=result.label_column,
            y_key=result.value_column,
            explanation=_LINE_EXPLANATIONS[plan.time_unit or TimeUnit.MONTH],
        )
    return ChartSpec(
        chart_type=CHART_BAR,
        x_key=result.label_column,
        y_key=result.value_column,
        explanation=_BAR_EXPLANATION,
    )

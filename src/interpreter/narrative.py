"""
Narrative generator -- deterministic, template-based text for a result.

No model calls: the summary names the top rows, the insights come from
two fixed rules (leader margin, Pareto concentration) and the
recommendations are constant placeholders.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.interpreter.aggregator import AggregationResult
from src.interpreter.plan import IntentPlan, Operation
from src.interpreter.values import format_number

SUMMARY_TOP_ROWS = 3
PARETO_MIN_ROWS = 5

NO_DATA_SUMMARY = "Não há dados suficientes para gerar um resumo."
PARETO_INSIGHT = "Há concentração nos primeiros grupos, sugerindo curva de Pareto."

RECOMMENDATIONS: tuple[str, ...] = (
    "Investigue as categorias com maior volume para oportunidades de otimização.",
    "Aplique segmentações adicionais para entender padrões escondidos.",
)


@dataclass
class Narrative:
    summary: str
    insights: list[str] = field(default_factory=list)
    patterns: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "insights": list(self.insights),
            "patterns": list(self.patterns),
            "recommendations": list(self.recommendations),
        }


def build_summary(result: AggregationResult) -> str:
    if not result.rows:
        return NO_DATA_SUMMARY
    names = ", ".join(
        f"{r.label} ({format_number(r.value)})" for r in result.rows[:SUMMARY_TOP_ROWS]
    )
    return f"Os principais resultados são {names}."


def build_insights(plan: IntentPlan, result: AggregationResult) -> list[str]:
    insights: list[str] = []
    rows = result.rows

    if len(rows) >= 2:
        top, second = rows[0], rows[1]
        diff = top.value - second.value
        if diff > 0:
            unit = "ocorrências" if plan.is_time_series else "unidades"
            insights.append(f"{top.label} supera {second.label} em {format_number(diff)} {unit}.")

    if len(rows) >= PARETO_MIN_ROWS:
        insights.append(PARETO_INSIGHT)

    return insights


def narrate(plan: IntentPlan, result: AggregationResult) -> Narrative:
    """Summary, insights and recommendations for *result*; patterns stay empty."""
    return Narrative(
        summary=build_summary(result),
        insights=build_insights(plan, result),
        patterns=[],
        recommendations=list(RECOMMENDATIONS),
    )


def describe_plan(plan: IntentPlan) -> str:
    """One sentence stating how the question was understood."""
    if plan.is_time_series:
        return (
            "A pergunta foi interpretada como uma análise de tendência ao longo "
            f"do tempo usando a coluna '{plan.date_column}'."
        )
    group = plan.group_by or ""
    if plan.operation == Operation.SUM:
        return f"A pergunta foi interpretada como soma de '{plan.value_column}' por '{group}'."
    if plan.operation == Operation.AVG:
        return f"A pergunta foi interpretada como média de '{plan.value_column}' por '{group}'."

    text = f"A pergunta foi interpretada como contagem de registros por '{group}'."
    if plan.filter is not None:
        text += f" Filtro aplicado: '{plan.filter.column}' = '{plan.filter.equals}'."
    return text

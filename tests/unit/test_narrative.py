"""
Unit tests -- deterministic narrative.
"""
from src.interpreter.aggregator import AggregateRow, AggregationResult
from src.interpreter.narrative import (
    NO_DATA_SUMMARY,
    PARETO_INSIGHT,
    RECOMMENDATIONS,
    describe_plan,
    narrate,
)
from src.interpreter.plan import EqualityFilter, IntentPlan, Operation, TimeUnit

COUNT_PLAN = IntentPlan(operation=Operation.COUNT, group_by="cliente", limit=3)
SERIES_PLAN = IntentPlan(operation=Operation.TIME_SERIES, date_column="data", time_unit=TimeUnit.MONTH)


def _result(*pairs, label_column="categoria"):
    return AggregationResult(rows=[AggregateRow(l, v) for l, v in pairs], label_column=label_column)



def test_summary_lists_top_three():
    story = narrate(COUNT_PLAN, _result(("A", 5), ("B", 4), ("C", 3), ("D", 1)))
    assert story.summary == "Os principais resultados são A (5), B (4), C (3)."


def test_summary_formats_integral_floats():
    story = narrate(COUNT_PLAN, _result(("A", 15.0), ("B", 2.5)))
    assert story.summary == "Os principais resultados são A (15), B (2.5)."


def test_summary_without_rows():
    story = narrate(COUNT_PLAN, _result())
    assert story.summary == NO_DATA_SUMMARY
    assert story.insights == []



def test_leader_insight_in_units():
    story = narrate(COUNT_PLAN, _result(("A", 2), ("B", 1)))
    assert story.insights == ["A supera B em 1 unidades."]


def test_leader_insight_in_occurrences_for_time_series():
    story = narrate(SERIES_PLAN, _result(("2025-01", 2), ("2025-02", 1), label_column="periodo"))
    assert story.insights == ["2025-01 supera 2025-02 em 1 ocorrências."]


def test_no_leader_insight_on_tie():
    story = narrate(COUNT_PLAN, _result(("A", 2), ("B", 2)))
    assert story.insights == []


def test_pareto_insight_from_five_rows():
    story = narrate(COUNT_PLAN, _result(("A", 9), ("B", 5), ("C", 3), ("D", 2), ("E", 1)))
    assert story.insights[-1] == PARETO_INSIGHT
    assert len(story.insights) == 2


def test_recommendations_fixed_and_patterns_empty():
    story = narrate(COUNT_PLAN, _result(("A", 1)))
    assert story.recommendations == list(RECOMMENDATIONS)
    assert len(story.recommendations) == 2
    assert story.patterns == []


def test_to_dict():
    d = narrate(COUNT_PLAN, _result(("A", 1))).to_dict()
    assert set(d) == {"summary", "insights", "patterns", "recommendations"}



def test_describe_count():
    assert describe_plan(COUNT_PLAN) == "A pergunta foi interpretada como contagem de registros por 'cliente'."


def test_describe_count_with_filter():
    plan = IntentPlan(group_by="cliente", filter=EqualityFilter(column="regiao", equals="sul"))
    assert describe_plan(plan).endswith("Filtro aplicado: 'regiao' = 'sul'.")


def test_describe_sum_and_avg():
    s = IntentPlan(operation=Operation.SUM, group_by="cliente", value_column="valor")
    a = IntentPlan(operation=Operation.AVG, group_by="cliente", value_column="valor")
    assert describe_plan(s) == "A pergunta foi interpretada como soma de 'valor' por 'cliente'."
    assert describe_plan(a) == "A pergunta foi interpretada como média de 'valor' por 'cliente'."


def test_describe_time_series():
    assert "usando a coluna 'data'" in describe_plan(SERIES_PLAN)

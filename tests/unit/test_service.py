"""
Unit tests -- insights service: validation, orchestration, response shape.
"""
import pytest

from src.core.config import get_settings
from src.interpreter.dataset import Dataset
from src.interpreter.errors import (
    InternalAnalysisFailure,
    InvalidQuestionError,
    NoDataLoadedError,
)
from src.interpreter.service import analyze, interpret, validate


@pytest.fixture
def clientes():
    return Dataset(
        columns=["cliente", "valor"],
        rows=[
            {"cliente": "A", "valor": 10},
            {"cliente": "A", "valor": 5},
            {"cliente": "B", "valor": 1},
        ],
    )


@pytest.fixture
def pedidos():
    return Dataset(
        columns=["data", "cliente", "regiao", "valor"],
        rows=[
            {"data": "2025-01-05", "cliente": "Acme", "regiao": "Sul", "valor": "100"},
            {"data": "2025-01-20", "cliente": "Beta", "regiao": "Norte", "valor": "50"},
            {"data": "2025-02-11", "cliente": "Acme", "regiao": "Sul", "valor": "70"},
            {"data": "2025-03-02", "cliente": "Gama", "regiao": "Sul", "valor": "30"},
        ],
    )



def test_top_clientes_example(clientes):
    resp = analyze("top 3 clientes", clientes)
    assert resp.table.rows == [{"categoria": "A", "valor": 2}, {"categoria": "B", "valor": 1}]
    assert resp.operation.limit == 3
    assert resp.operation.type == "group_by"
    assert resp.operation.group_by == "cliente"
    assert resp.chart.type == "bar"


def test_monthly_trend(pedidos):
    resp = analyze("qual a evolução mensal", pedidos)
    assert resp.table.columns == ["periodo", "valor"]
    assert resp.table.rows == [
        {"periodo": "2025-01", "valor": 2},
        {"periodo": "2025-02", "valor": 1},
        {"periodo": "2025-03", "valor": 1},
    ]
    assert resp.operation.type == "time_series"
    assert resp.operation.time_unit == "month"
    assert resp.operation.date_column == "data"
    assert resp.chart.type == "line"
    assert "DATE_TRUNC('month'" in resp.sql


def test_sum_reports_metric(pedidos):
    resp = analyze("faturamento por cliente", pedidos)
    assert resp.operation.metric_op == "sum"
    assert resp.operation.metric_field == "valor"
    assert resp.table.rows[0] == {"categoria": "Acme", "valor": 170.0}


def test_count_filter_in_response(pedidos):
    resp = analyze("quantos pedidos por cliente da sul", pedidos)
    assert resp.operation.filter is not None
    assert resp.operation.filter.column == "regiao"
    assert sum(r["valor"] for r in resp.table.rows) == 3
    assert "WHERE regiao = 'sul'" in resp.sql


def test_no_group_column_single_bucket():
    ds = Dataset(columns=["v"], rows=[{"v": 1}, {"v": 2}, {"v": 3}])
    resp = analyze("quantos registros", ds)
    assert resp.table.rows == [{"categoria": "", "valor": 3}]



def test_empty_dataset_checked_before_question(monkeypatch):
    def boom(*_a, **_kw):
        raise AssertionError("classify must not run")

    monkeypatch.setattr("src.interpreter.schema.classify", boom)
    with pytest.raises(NoDataLoadedError):
        analyze(None, Dataset())


def test_missing_dataset():
    with pytest.raises(NoDataLoadedError):
        analyze("top 3 clientes", None)


@pytest.mark.parametrize("question", [None, "", "   ", 42, ["top"]])
def test_invalid_question(clientes, question):
    with pytest.raises(InvalidQuestionError) as exc_info:
        analyze(question, clientes)
    assert exc_info.value.http_status == 400


def test_unexpected_error_is_wrapped(clientes, monkeypatch):
    def boom(*_a, **_kw):
        raise KeyError("bad row")

    monkeypatch.setattr("src.interpreter.aggregator.run", boom)
    with pytest.raises(InternalAnalysisFailure) as exc_info:
        analyze("top 3 clientes", clientes)
    assert exc_info.value.http_status == 500
    assert isinstance(exc_info.value.__cause__, KeyError)



def test_provider_heuristic(clientes, monkeypatch):
    monkeypatch.setattr(get_settings(), "openai_api_key", "")
    assert analyze("top 3 clientes", clientes).provider == "heuristic"


def test_provider_with_key(clientes, monkeypatch):
    monkeypatch.setattr(get_settings(), "openai_api_key", "sk-test")
    assert analyze("top 3 clientes", clientes).provider == "heuristic+openai-optional"


def test_to_dict_shape(clientes):
    d = analyze("top 3 clientes", clientes).to_dict()
    assert set(d) == {"interpretation", "operation", "table", "chart", "sql", "analysis", "provider"}
    assert d["table"]["labelColumn"] == "categoria"
    assert d["table"]["valueColumn"] == "valor"
    assert d["chart"]["xKey"] == "categoria"
    assert d["operation"]["groupBy"] == "cliente"
    assert len(d["analysis"]["recommendations"]) == 2


def test_dataset_is_not_mutated(pedidos):
    before = pedidos.model_dump()
    analyze("faturamento por cliente", pedidos)
    analyze("evolucao mensal", pedidos)
    assert pedidos.model_dump() == before


def test_interpret_is_deterministic(pedidos):
    assert interpret("top 2 clientes", pedidos) == interpret("top 2 clientes", pedidos)


def test_monthly_trend_example():
    ds = Dataset(columns=["data"], rows=[{"data": "2025-01-15"}, {"data": "2025-01-20"}, {"data": "2025-02-01"}])
    resp = analyze("qual a evolução mensal", ds)
    assert resp.table.rows == [{"periodo": "2025-01", "valor": 2}, {"periodo": "2025-02", "valor": 1}]
    assert resp.operation.group_by is None


def test_trend_skips_time_of_day_column():
    ds = Dataset(
        columns=["hora", "data", "cliente"],
        rows=[
            {"hora": "10:30", "data": "2025-01-15", "cliente": "A"},
            {"hora": "11:45", "data": "2025-01-20", "cliente": "B"},
            {"hora": "09:10", "data": "2025-02-01", "cliente": "A"},
            {"hora": "14:00", "data": "2025-03-05", "cliente": "C"},
        ],
    )
    resp = analyze("qual a evolução mensal", ds)
    assert resp.operation.date_column == "data"
    assert [r["periodo"] for r in resp.table.rows] == ["2025-01", "2025-02", "2025-03"]


def test_limits_above_one_thousand(clientes, monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "max_limit", 5000)
    monkeypatch.setattr(settings, "default_limit", 2000)
    resp = analyze("quais clientes", clientes)
    assert resp.operation.limit == 2000
    assert resp.sql.endswith("LIMIT 2000")


def test_validate_checks_dataset_before_question():
    with pytest.raises(NoDataLoadedError):
        validate("", Dataset())
    with pytest.raises(InvalidQuestionError):
        validate(" ", Dataset(columns=["a"], rows=[{"a": 1}]))

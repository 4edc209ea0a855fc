"""
Unit tests -- Dataset normalisation.
"""
from src.interpreter.dataset import Dataset


def test_missing_cells_default_to_empty_string():
    ds = Dataset(columns=["a", "b"], rows=[{"a": 1}])
    assert ds.rows == [{"a": 1, "b": ""}]


def test_unknown_keys_dropped():
    ds = Dataset(columns=["a"], rows=[{"a": 1, "zzz": 2}])
    assert ds.rows == [{"a": 1}]


def test_duplicate_columns_collapsed_in_order():
    ds = Dataset(columns=["b", "a", "b"], rows=[])
    assert ds.columns == ["b", "a"]


def test_is_empty():
    assert Dataset().is_empty
    assert Dataset(columns=["a"], rows=[]).is_empty
    assert not Dataset(columns=["a"], rows=[{"a": 1}]).is_empty


def test_source_rows_not_mutated():
    source = [{"a": 1}]
    Dataset(columns=["a", "b"], rows=source)
    assert source == [{"a": 1}]


def test_column_values():
    ds = Dataset(columns=["a"], rows=[{"a": 1}, {"a": 2}])
    assert ds.column_values("a") == [1, 2]

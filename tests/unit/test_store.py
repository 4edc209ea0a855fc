"""
Unit tests -- in-memory dataset and share stores.
"""
import re

import pytest

from src.data.errors import RowUpdateError, ShareNotFound
from src.data.store import DatasetStore, ShareStore
from src.interpreter.dataset import Dataset


@pytest.fixture
def store():
    return DatasetStore(Dataset(columns=["a", "b"], rows=[{"a": "1", "b": "x"}]))


def test_starts_empty():
    assert DatasetStore().snapshot().is_empty


def test_snapshot_is_detached(store):
    snap = store.snapshot()
    store.update_cell(0, "a", "9")
    assert snap.rows[0]["a"] == "1"
    assert store.snapshot().rows[0]["a"] == "9"


def test_update_cell_returns_row(store):
    assert store.update_cell(0, "b", "y") == {"a": "1", "b": "y"}


@pytest.mark.parametrize(
    "row_index, column, message",
    [
        ("0", "a", "Invalid parameters"),
        (0, "", "Invalid parameters"),
        (True, "a", "Invalid parameters"),
        (5, "a", "Row index out of bounds"),
        (-1, "a", "Row index out of bounds"),
        (0, "zzz", "Column not found"),
    ],
)
def test_update_cell_errors(store, row_index, column, message):
    with pytest.raises(RowUpdateError) as exc_info:
        store.update_cell(row_index, column, "v")
    assert exc_info.value.message == message


def test_replace(store):
    store.replace(Dataset(columns=["c"], rows=[{"c": 1}]))
    assert store.snapshot().columns == ["c"]



def test_share_create_and_get():
    shares = ShareStore()
    design = shares.create([{"a": 1}], ["a"])
    assert re.fullmatch(r"[0-9a-f]{32}", design.id)
    assert design.view_mode == "table"
    assert len(shares) == 1

    assert shares.get(design.id).access_count == 1
    assert shares.get(design.id).access_count == 2


def test_share_keeps_client_timestamp():
    design = ShareStore().create([], [], view_mode="chart", timestamp="2025-01-01T00:00:00Z")
    d = design.to_dict()
    assert d["viewMode"] == "chart"
    assert d["timestamp"] == "2025-01-01T00:00:00Z"
    assert d["accessCount"] == 0


def test_share_unknown_id():
    with pytest.raises(ShareNotFound) as exc_info:
        ShareStore().get("nope")
    assert exc_info.value.http_status == 404

"""
In-memory stores for the active dataset and shared designs.

Both are plain objects owned by the FastAPI app (``app.state``) and handed
to the routes through dependencies, so tests get a fresh store per app.
Nothing is persisted.
"""
from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from src.core.logging import get_logger
from src.data.errors import RowUpdateError, ShareNotFound
from src.interpreter.dataset import Dataset

logger = get_logger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class DatasetStore:
    """Thread-safe holder of the currently loaded dataset."""

    def __init__(self, dataset: Dataset | None = None):
        self._lock = threading.Lock()
        self._dataset = dataset or Dataset()

    def replace(self, dataset: Dataset) -> None:
        with self._lock:
            self._dataset = dataset
        logger.info("Active dataset replaced: %d rows x %d columns",
                    dataset.row_count, len(dataset.columns))

    def snapshot(self) -> Dataset:
        """Copy of the active dataset; later edits do not affect it."""
        with self._lock:
            return self._dataset.model_copy(deep=True)

    def update_cell(self, row_index: Any, column: Any, value: Any) -> dict[str, Any]:
        """Set one cell and return the updated row."""
        if not isinstance(row_index, int) or isinstance(row_index, bool) or not column:
            raise RowUpdateError("Invalid parameters")
        with self._lock:
            rows = self._dataset.rows
            if row_index < 0 or row_index >= len(rows):
                raise RowUpdateError("Row index out of bounds")
            if column not in self._dataset.columns:
                raise RowUpdateError("Column not found")
            updated = {**rows[row_index], column: value}
            new_rows = list(rows)
            new_rows[row_index] = updated
            self._dataset = Dataset(columns=self._dataset.columns, rows=new_rows)
        return updated


@dataclass
class SharedDesign:
    id: str
    data: list[dict[str, Any]]
    columns: list[str]
    view_mode: str = "table"
    timestamp: str = field(default_factory=_now_iso)
    created_at: str = field(default_factory=_now_iso)
    access_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "data": self.data,
            "columns": self.columns,
            "viewMode": self.view_mode,
            "timestamp": self.timestamp,
            "createdAt": self.created_at,
            "accessCount": self.access_count,
        }


class ShareStore:
    """Share-link registry keyed by random 32-hex-character ids."""

    def __init__(self):
        self._lock = threading.Lock()
        self._designs: dict[str, SharedDesign] = {}

    def create(
        self,
        data: list[dict[str, Any]],
        columns: list[str],
        view_mode: str | None = None,
        timestamp: str | None = None,
    ) -> SharedDesign:
        design = SharedDesign(
            id=secrets.token_hex(16),
            data=data,
            columns=columns,
            view_mode=view_mode or "table",
        )
        if timestamp:
            design.timestamp = timestamp
        with self._lock:
            self._designs[design.id] = design
        logger.info("Shared design created id=%s rows=%d", design.id, len(data))
        return design

    def get(self, share_id: str) -> SharedDesign:
        """Fetch a design and count the access."""
        with self._lock:
            design = self._designs.get(share_id)
            if design is None:
                raise ShareNotFound(share_id)
            design.access_count += 1
            return design

    def __len__(self) -> int:
        with self._lock:
            return len(self._designs)

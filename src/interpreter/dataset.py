"""
Dataset -- the tabular snapshot the interpreter reads.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class Dataset(BaseModel):
    """Ordered column names plus rows keyed by those names.

    Rows are normalised on construction so that every row has exactly the
    dataset's columns: missing cells become ``""`` and unknown keys are
    dropped.
    """

    columns: list[str] = Field(default_factory=list, description="Column names in first-seen order")
    rows: list[dict[str, Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _normalise_rows(self) -> "Dataset":
        seen: set[str] = set()
        unique: list[str] = []
        for col in self.columns:
            if col not in seen:
                seen.add(col)
                unique.append(col)
        self.columns = unique
        self.rows = [{col: row.get(col, "") for col in unique} for row in self.rows]
        return self

    @property
    def is_empty(self) -> bool:
        return not self.rows or not self.columns

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def column_values(self, column: str) -> list[Any]:
        return [row.get(column, "") for row in self.rows]

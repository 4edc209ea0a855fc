"""
Upload parsing and export rendering.

CSV goes through pandas with every cell kept as text (the interpreter
decides what is numeric or a date, not the parser).  JSON may be an array
of objects, an object with a ``data`` array, or a single object.  Bytes
that are not UTF-8 are decoded with the encoding chardet detects, falling
back to latin-1.
"""
from __future__ import annotations

import io
import json
from pathlib import PurePath
from typing import Any

import chardet
import pandas as pd

from src.core.logging import get_logger
from src.data.errors import UnsupportedFileType, UploadError
from src.interpreter.dataset import Dataset

logger = get_logger(__name__)

ALLOWED_EXTENSIONS = (".csv", ".json")
EXPORT_FORMATS = ("csv", "json")


def decode_text(content: bytes) -> str:
    """UTF-8 first, then the encoding chardet detects, then latin-1."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass
    encoding = chardet.detect(content[:102400]).get("encoding") or "latin-1"
    try:
        return content.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        # latin-1 maps every byte
        return content.decode("latin-1")


def parse_csv(content: bytes | str) -> Dataset:
    text = decode_text(content) if isinstance(content, bytes) else content
    if not text.strip():
        return Dataset()
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise UploadError(f"Invalid CSV format: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]
    df = df.fillna("")
    return Dataset(columns=list(df.columns), rows=df.to_dict(orient="records"))


def _first_seen_columns(records: list[dict[str, Any]]) -> list[str]:
    columns: list[str] = []
    seen: set[str] = set()
    for rec in records:
        for key in rec:
            if key not in seen:
                seen.add(key)
                columns.append(key)
    return columns


def parse_json(content: bytes | str) -> Dataset:
    text = decode_text(content) if isinstance(content, bytes) else content
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UploadError("Invalid JSON format") from exc

    if isinstance(parsed, list):
        records = parsed
    elif isinstance(parsed, dict) and isinstance(parsed.get("data"), list):
        records = parsed["data"]
    else:
        records = [parsed]

    if not all(isinstance(r, dict) for r in records):
        raise UploadError("Invalid JSON format: expected objects as rows")

    return Dataset(columns=_first_seen_columns(records), rows=records)


def parse_upload(filename: str, content: bytes) -> Dataset:
    """Dispatch on the file extension."""
    ext = PurePath(filename or "").suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise UnsupportedFileType(
            f"Unsupported file type '{ext or filename}'. Please use CSV or JSON files."
        )
    dataset = parse_csv(content) if ext == ".csv" else parse_json(content)
    logger.info("Parsed %s: %d rows x %d columns", filename, dataset.row_count, len(dataset.columns))
    return dataset


def to_csv(rows: list[dict[str, Any]], columns: list[str]) -> str:
    df = pd.DataFrame(rows, columns=columns).fillna("")
    return df.to_csv(index=False, lineterminator="\n").rstrip("\n")


def to_json(rows: list[dict[str, Any]]) -> str:
    return json.dumps(rows, indent=2, ensure_ascii=False)


def render_export(rows: list[dict[str, Any]], columns: list[str], fmt: str) -> tuple[str, str, str]:
    """Return ``(content, mime_type, filename)`` for an export request."""
    if fmt not in EXPORT_FORMATS:
        raise UnsupportedFileType("Invalid format. Use csv or json")
    if fmt == "csv":
        return to_csv(rows, columns), "text/csv", "data.csv"
    return to_json(rows), "application/json", "data.json"

"""
Synonym resolver -- maps question wording to actual dataset columns.

The synonym table (``synonyms.yml``) lists, per semantic key, the terms
users employ for it.  Resolution only looks at the question text and the
column names, never at row values:

  1. for each key, walk its terms in order; a term present in the question
     is matched against the columns (substring of the normalised name);
     the first hit settles the key
  2. if no entity column was found, fall back to the first column whose
     name itself appears in the question
"""
from __future__ import annotations

import re
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path

import yaml

from src.core.config import get_settings
from src.core.logging import get_logger
from src.core.utils import normalize

logger = get_logger(__name__)

_SYNONYMS_PATH = Path(__file__).resolve().parent / "synonyms.yml"

_HAS_LETTER_RE = re.compile(r"[a-z]")


@dataclass(frozen=True)
class ColumnGuesses:
    """Best column per semantic key (``None`` when unresolved)."""
    entity: str | None = None
    product: str | None = None
    category: str | None = None
    date: str | None = None
    value: str | None = None
    quantity: str | None = None
    processes: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


SEMANTIC_KEYS: tuple[str, ...] = tuple(f.name for f in fields(ColumnGuesses))


def _parse_synonyms(raw: dict) -> dict[str, list[str]]:
    table = raw.get("synonyms") or {}
    unknown = set(table) - set(SEMANTIC_KEYS)
    if unknown:
        raise ValueError(f"Unknown semantic keys in synonym table: {', '.join(sorted(unknown))}")

    parsed: dict[str, list[str]] = {}
    for key in SEMANTIC_KEYS:
        terms: list[str] = []
        for term in table.get(key) or []:
            norm = normalize(str(term))
            if norm and norm not in terms:
                terms.append(norm)
        parsed[key] = terms
    return parsed


@lru_cache(maxsize=1)
def load_synonyms(path: str | None = None) -> dict[str, list[str]]:
    """Load and cache the synonym table, normalising every term."""
    p = Path(path) if path else _SYNONYMS_PATH
    with open(p, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    table = _parse_synonyms(raw)
    logger.debug("Loaded synonym table from %s (%d keys)", p, len(table))
    return table


def _first_column_containing(term: str, columns: list[tuple[str, str]]) -> str | None:
    for raw, norm in columns:
        if term in norm:
            return raw
    return None


def _resolve_key(question: str, terms: list[str], columns: list[tuple[str, str]]) -> str | None:
    for term in terms:
        if term not in question:
            continue
        col = _first_column_containing(term, columns)
        if col is not None:
            return col
    return None


def _fuzzy_entity(question: str, columns: list[tuple[str, str]]) -> str | None:
    # Short names ("id", "uf") can hit unrelated words; the minimum length
    # defaults to 1, which keeps every alphabetic column eligible.
    min_len = get_settings().fuzzy_entity_min_length
    for raw, norm in columns:
        if len(norm) >= min_len and _HAS_LETTER_RE.search(norm) and norm in question:
            return raw
    return None


def resolve(question: str, columns: list[str]) -> ColumnGuesses:
    """Guess which column the question refers to for each semantic key."""
    q = normalize(question)
    norms = [(c, normalize(c)) for c in columns]
    table = load_synonyms()

    found: dict[str, str | None] = {}
    for key in SEMANTIC_KEYS:
        found[key] = _resolve_key(q, table.get(key, []), norms)

    if found["entity"] is None:
        found["entity"] = _fuzzy_entity(q, norms)

    return ColumnGuesses(**found)

"""
Small shared utilities: latency timing and text folding for matching.
"""
from __future__ import annotations

import time
import unicodedata
from contextlib import contextmanager
from typing import Generator


@contextmanager
def timer() -> Generator[dict[str, int], None, None]:
    """Yield a dict that receives ``elapsed_ms`` when the block exits."""
    elapsed: dict[str, int] = {"elapsed_ms": 0}
    started = time.perf_counter()
    try:
        yield elapsed
    finally:
        elapsed["elapsed_ms"] = int((time.perf_counter() - started) * 1000)


def normalize(text: str) -> str:
    """Lowercase *text* and strip diacritics ("Evolução" -> "evolucao").

    Question text and column names both go through this before any
    keyword or synonym comparison.
    """
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

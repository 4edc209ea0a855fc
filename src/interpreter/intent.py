"""
Intent detector -- turns a question plus the resolved schema into an
IntentPlan.

Deterministic keyword rules, evaluated in a fixed order:
  1. row limit        ("top 5", "principais 3", or any 1-3 digit number)
  2. group / value    (synonym guesses, then first categorical / numeric)
  3. trend            (time-series keywords + a date column)
  4. equality filter  (token after the last "de" / "of" / ...)
  5. aggregation      (sum / avg keywords, else count)
"""
from __future__ import annotations

import re

from src.core.config import get_settings
from src.core.logging import get_logger
from src.core.utils import normalize
from src.interpreter.dataset import Dataset
from src.interpreter.plan import EqualityFilter, IntentPlan, Operation, TimeUnit
from src.interpreter.schema import ColumnRoles
from src.interpreter.synonyms import ColumnGuesses
from src.interpreter.values import as_label

logger = get_logger(__name__)

# ── Keyword tables (matched against normalised text) ─────

_TOP_N_RE = re.compile(r"\b(top|maiores|principais)\s*(\d{1,3})")
_ANY_N_RE = re.compile(r"\b(\d{1,3})\b")

_TREND_KEYWORDS: list[str] = [
    "tendencia", "evolucao", "por mes", "mensal", "anual", "por ano",
    "timeline", "ao longo", "mes a mes", "year over year",
    "trend", "evolution", "monthly", "yearly", "over time", "month over month",
]

_YEAR_KEYWORDS: list[str] = ["ano", "year", "anual"]

_SUM_KEYWORDS: list[str] = [
    "somar", "soma", "faturamento", "receita", "valor total", "totalizado",
    "sum", "revenue",
]

_AVG_KEYWORDS: list[str] = ["media", "avg", "average", "mean"]

_FILTER_PREPOSITIONS: list[str] = ["de", "do", "da", "of", "from"]

_TOKEN_SPLIT_RE = re.compile(r"[\s?.,!;:]+")


def _phrase_re(phrases: list[str]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(re.escape(p) for p in phrases) + r")\b")


_TREND_RE = _phrase_re(_TREND_KEYWORDS)
_SUM_RE = _phrase_re(_SUM_KEYWORDS)
_AVG_RE = _phrase_re(_AVG_KEYWORDS)
_PREPOSITION_RE = _phrase_re(_FILTER_PREPOSITIONS)


# ── Individual rules ─────────────────────────────────────

def guess_limit(question: str) -> int:
    """Extract the requested row count, clamped to ``[0, max_limit]``."""
    settings = get_settings()
    q = normalize(question)
    m = _TOP_N_RE.search(q)
    if m:
        n = int(m.group(2))
    else:
        m = _ANY_N_RE.search(q)
        n = int(m.group(1)) if m else settings.default_limit
    return max(0, min(settings.max_limit, n))


def wants_trend(question: str) -> bool:
    return bool(_TREND_RE.search(normalize(question)))


def guess_time_unit(question: str) -> TimeUnit:
    q = normalize(question)
    if any(kw in q for kw in _YEAR_KEYWORDS):
        return TimeUnit.YEAR
    return TimeUnit.MONTH


def wants_sum(question: str) -> bool:
    return bool(_SUM_RE.search(normalize(question)))


def wants_avg(question: str) -> bool:
    return bool(_AVG_RE.search(normalize(question)))


def filter_token(question: str) -> str | None:
    """Return the first word after the last preposition, if any."""
    q = normalize(question)
    if not any(f" {p} " in q for p in _FILTER_PREPOSITIONS):
        return None
    after = _PREPOSITION_RE.split(q)[-1].strip()
    tokens = [t for t in _TOKEN_SPLIT_RE.split(after) if t]
    return tokens[0] if tokens else None


def extract_filter(question: str, roles: ColumnRoles, dataset: Dataset) -> EqualityFilter | None:
    """Find the first categorical column holding the filter token as a value."""
    token = filter_token(question)
    if not token:
        return None
    for col in roles.categorical:
        if any(as_label(row.get(col)).lower() == token for row in dataset.rows):
            return EqualityFilter(column=col, equals=token)
    return None


def choose_group_by(roles: ColumnRoles, guesses: ColumnGuesses) -> str | None:
    if guesses.entity:
        return guesses.entity
    if guesses.category:
        return guesses.category
    return roles.categorical[0] if roles.categorical else None


def choose_value_column(roles: ColumnRoles, guesses: ColumnGuesses) -> str | None:
    if guesses.value and guesses.value in roles.numeric:
        return guesses.value
    return roles.numeric[0] if roles.numeric else None


def choose_date_column(roles: ColumnRoles, guesses: ColumnGuesses) -> str | None:
    if guesses.date and guesses.date in roles.date:
        return guesses.date
    return roles.date[0] if roles.date else None


# ── Public API ───────────────────────────────────────────

def detect(
    question: str,
    roles: ColumnRoles,
    guesses: ColumnGuesses,
    dataset: Dataset,
) -> IntentPlan:
    """Build the IntentPlan for *question*.

    A missing group column is not an error: the plan carries
    ``group_by=None`` and the engine puts every row in one ``""`` bucket.
    """
    limit = guess_limit(question)
    group_by = choose_group_by(roles, guesses)
    value_column = choose_value_column(roles, guesses)

    if wants_trend(question) and roles.date:
        plan = IntentPlan(
            operation=Operation.TIME_SERIES,
            date_column=choose_date_column(roles, guesses),
            time_unit=guess_time_unit(question),
            limit=limit,
        )
    elif wants_sum(question) and value_column:
        plan = IntentPlan(operation=Operation.SUM, group_by=group_by, value_column=value_column, limit=limit)
    elif wants_avg(question) and value_column:
        plan = IntentPlan(operation=Operation.AVG, group_by=group_by, value_column=value_column, limit=limit)
    else:
        plan = IntentPlan(
            operation=Operation.COUNT,
            group_by=group_by,
            limit=limit,
            filter=extract_filter(question, roles, dataset),
        )

    logger.info("Intent -> %s", plan.model_dump_json())
    return plan

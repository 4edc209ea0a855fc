"""
Unit tests -- cell coercion helpers.
"""
from datetime import date, datetime

import pytest

from src.interpreter.values import (
    as_date,
    as_label,
    as_number,
    format_number,
    is_empty,
)


def test_empty_values():
    assert is_empty(None)
    assert is_empty("")
    assert is_empty("   ")
    assert not is_empty(0)
    assert not is_empty("0")


def test_as_number_parses_strings_and_numbers():
    assert as_number("12.5") == 12.5
    assert as_number(" 7 ") == 7.0
    assert as_number(3) == 3.0
    assert as_number("-1e3") == -1000.0


def test_as_number_rejects_non_numeric():
    assert as_number("abc") is None
    assert as_number("") is None
    assert as_number(None) is None
    assert as_number("1_000") is None


def test_as_number_rejects_non_finite():
    assert as_number("inf") is None
    assert as_number("nan") is None
    assert as_number(float("inf")) is None


def test_as_number_bool():
    assert as_number(True) == 1.0



def test_as_date_iso():
    assert as_date("2025-01-15") == datetime(2025, 1, 15)


def test_as_date_month_first_for_ambiguous():
    assert as_date("1/2/2025") == datetime(2025, 1, 2)


def test_as_date_native_values():
    assert as_date(date(2024, 3, 1)) == datetime(2024, 3, 1)
    stamp = datetime(2024, 3, 1, 12, 30)
    assert as_date(stamp) == stamp


def test_as_date_year_only_defaults_to_january():
    assert as_date("2024") == datetime(2024, 1, 1)


def test_as_date_rejects_bare_numbers():
    assert as_date("10") is None
    assert as_date("12.5") is None
    assert as_date(10) is None


def test_as_date_rejects_text():
    assert as_date("A") is None
    assert as_date("hello") is None
    assert as_date("") is None
    assert as_date(None) is None


@pytest.mark.parametrize("text", ["10:30", "10h", "09:10:00", "Mon", "Sunday", "Jan"])
def test_as_date_rejects_text_without_year(text):
    assert as_date(text) is None


def test_as_date_accepts_month_and_year():
    assert as_date("Jan 2025") == datetime(2025, 1, 1)
    assert as_date("2025-03-04 10:30") == datetime(2025, 3, 4, 10, 30)



def test_format_number():
    assert format_number(15.0) == "15"
    assert format_number(2.5) == "2.5"
    assert format_number(7) == "7"


def test_as_label():
    assert as_label(None) == ""
    assert as_label("") == ""
    assert as_label(2.0) == "2"
    assert as_label(2.5) == "2.5"
    assert as_label(3) == "3"
    assert as_label("Acme") == "Acme"

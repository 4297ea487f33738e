"""Unit tests for currency/date formatting and date helpers"""

from datetime import date

import pytest

from benkon_quote.utils.date_utils import add_days, validity_window
from benkon_quote.utils.formatters import format_currency, format_date, parse_number_input


@pytest.mark.parametrize(
    "amount, expected",
    [
        (6_500_000, "6.500.000 VNĐ"),
        (965_000, "965.000 VNĐ"),
        (0, "0 VNĐ"),
        (-1_000, "-1.000 VNĐ"),
        (1234.5, "1.234,5 VNĐ"),
    ],
)
def test_format_currency_vi(amount, expected):
    """Test Vietnamese grouping with VNĐ suffix"""
    assert format_currency(amount, "vi") == expected


@pytest.mark.parametrize(
    "amount, expected",
    [
        (6_500_000, "₫6,500,000"),
        (0, "₫0"),
        (-1_000, "-₫1,000"),
        (1234.5, "₫1,235"),  # VND has no minor unit
    ],
)
def test_format_currency_en(amount, expected):
    """Test US grouping with the dong symbol"""
    assert format_currency(amount, "en") == expected


def test_format_currency_unknown_locale_uses_default():
    """Test unsupported locales fall back to Vietnamese formatting"""
    assert format_currency(2_895_000, "fr") == "2.895.000 VNĐ"
    assert format_currency(2_895_000, None) == "2.895.000 VNĐ"


def test_format_date_long_form():
    """Test long dates per locale"""
    value = date(2026, 10, 19)

    assert format_date(value, "vi") == "19 tháng 10, 2026"
    assert format_date(value, "en") == "October 19, 2026"
    assert format_date(value, "en-US") == "October 19, 2026"


def test_add_days_crosses_year_end():
    """Test validity dates roll over months and years"""
    assert add_days(date(2026, 12, 20), 30) == date(2027, 1, 19)
    assert add_days(date(2026, 10, 19), -19) == date(2026, 9, 30)


def test_validity_window():
    """Test 30-day quote validity"""
    issued, valid_until = validity_window(date(2026, 10, 19), 30)

    assert issued == date(2026, 10, 19)
    assert valid_until == date(2026, 11, 18)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("6.500.000", 6_500_000),
        ("6,500,000 VNĐ", 6_500_000),
        ("  1 600 000 ", 1_600_000),
        ("", 0),
        ("abc", 0),
        (None, 0),
    ],
)
def test_parse_number_input(text, expected):
    """Test grouped form input parsing keeps digits only"""
    assert parse_number_input(text) == expected

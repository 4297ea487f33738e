"""Locale-aware rendering of VND amounts and dates"""

import re
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from benkon_quote.i18n.messages import normalize_locale

EN_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _group_digits(amount: Union[int, float, Decimal], thousands: str, decimal_point: str, max_fraction: int) -> str:
    value = Decimal(str(amount)).quantize(Decimal(1).scaleb(-max_fraction), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer, _, fraction = f"{abs(value):f}".partition(".")
    fraction = fraction.rstrip("0")

    grouped = f"{int(integer):,}".replace(",", thousands)
    return sign + grouped + (decimal_point + fraction if fraction else "")


def format_currency(amount: Union[int, float, Decimal], locale: Optional[str] = "vi") -> str:
    """
    Render a VND amount.

    Examples:
        vi: 6500000 -> "6.500.000 VNĐ"
        en: 6500000 -> "₫6,500,000"  (VND has no minor unit)
    """
    if normalize_locale(locale) == "vi":
        return _group_digits(amount, ".", ",", max_fraction=3) + " VNĐ"

    text = _group_digits(amount, ",", ".", max_fraction=0)
    if text.startswith("-"):
        return "-₫" + text[1:]
    return "₫" + text


def format_date(value: date, locale: Optional[str] = "vi") -> str:
    """Long date: '19 tháng 10, 2026' (vi) or 'October 19, 2026' (en)"""
    if normalize_locale(locale) == "vi":
        return f"{value.day} tháng {value.month}, {value.year}"
    return f"{EN_MONTHS[value.month - 1]} {value.day}, {value.year}"


def parse_number_input(text: Optional[str]) -> int:
    """Parse a grouped form input such as '6.500.000' or '6,500,000 VNĐ'; 0 when no digits"""
    digits = re.sub(r"[^\d]", "", text or "")
    return int(digits) if digits else 0

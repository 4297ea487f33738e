"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import Tuple


def add_days(from_date: date, days: int) -> date:
    """Add calendar days to a date (negative values go back in time)"""
    return from_date + timedelta(days=days)


def validity_window(issued_on: date, validity_days: int) -> Tuple[date, date]:
    """Issue date and last valid date of a quote"""
    return issued_on, add_days(issued_on, validity_days)

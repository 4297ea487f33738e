"""Quote metadata - numbering and validity window"""

import random
from datetime import date
from typing import Optional

from benkon_quote.config import settings
from benkon_quote.domain.models import CostComponents, CustomerInfo, QuoteData
from benkon_quote.utils.date_utils import validity_window


def generate_quote_number(issued_on: date, rng: Optional[random.Random] = None) -> str:
    """
    Quote number in the form QT-YYYYMMDD-NNN.

    NNN is a random 000-999 suffix; pass a seeded Random for reproducible numbers.
    """
    suffix = (rng or random).randint(0, 999)
    return f"{settings.quote_number_prefix}-{issued_on:%Y%m%d}-{suffix:03d}"


def create_quote(
    customer: CustomerInfo,
    costs: CostComponents,
    issued_on: date | None = None,
    validity_days: int | None = None,
    rng: Optional[random.Random] = None,
) -> QuoteData:
    """Attach a quote number and a validity window (default 30 days) to the inputs"""
    if issued_on is None:
        issued_on = date.today()
    if validity_days is None:
        validity_days = settings.quote_validity_days

    created_at, valid_until = validity_window(issued_on, validity_days)

    return QuoteData(
        customer=customer,
        costs=costs,
        quote_number=generate_quote_number(created_at, rng),
        created_at=created_at,
        valid_until=valid_until,
    )

"""Side-by-side cash-flow table rows for display and export"""

from dataclasses import dataclass
from typing import List

from benkon_quote.domain.calculations import PROJECTION_MONTHS, SOFTWARE_RENEWAL_MONTH
from benkon_quote.domain.models import Amount, CalculationResult

HIGHLIGHTED_MONTHS = (0, SOFTWARE_RENEWAL_MONTH, PROJECTION_MONTHS)


@dataclass(frozen=True)
class CashFlowRow:
    """One month of both plans"""

    month: int
    purchase_amount: Amount
    purchase_cumulative: Amount
    rental_amount: Amount
    rental_cumulative: Amount
    highlighted: bool  # setup month, software renewal, final month


def build_cash_flow_rows(result: CalculationResult) -> List[CashFlowRow]:
    """Pair purchase and rental payments month by month (0..24)"""
    return [
        CashFlowRow(
            month=purchase.month,
            purchase_amount=purchase.amount,
            purchase_cumulative=purchase.cumulative_amount,
            rental_amount=rental.amount,
            rental_cumulative=rental.cumulative_amount,
            highlighted=purchase.month in HIGHLIGHTED_MONTHS,
        )
        for purchase, rental in zip(result.purchase.cash_flow, result.rental.cash_flow)
    ]

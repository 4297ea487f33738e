"""Cost comparison engine - purchase vs. rental over a two-year horizon"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Callable, Tuple

from benkon_quote.domain.models import (
    Amount,
    CalculationResult,
    ComparisonSummary,
    CostComponents,
    CustomerInfo,
    MonthlyPayment,
    PurchaseOption,
    RentalOption,
)

# Month 0 is "now"; months 1..24 cover the two contract years
PROJECTION_MONTHS = 24
SOFTWARE_RENEWAL_MONTH = 13

RENTAL_MARKUP = Decimal("1.2")
RENTAL_TERM_MONTHS = 24
DEPOSIT_MONTHS = 3


def round_half_away_from_zero(value: Decimal) -> Amount:
    """Round to the nearest whole currency unit, ties away from zero (2.5 -> 3, -2.5 -> -3)"""
    if not value.is_finite():
        # inf/nan from float inputs pass through unrounded
        return float(value)
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def _to_decimal(amount: Amount) -> Decimal:
    # str() keeps float inputs at their shortest repr instead of the binary expansion
    return amount if isinstance(amount, Decimal) else Decimal(str(amount))


def _amortize_with_markup(amount: Amount) -> Amount:
    """Marked-up monthly share of a two-year amount, computed exactly at any magnitude"""
    base = _to_decimal(amount)
    with localcontext() as ctx:
        # markup/term is 0.05, so the quotient needs at most two more digits than the base
        ctx.prec = max(ctx.prec, len(base.as_tuple().digits) + 4)
        return round_half_away_from_zero(base * RENTAL_MARKUP / RENTAL_TERM_MONTHS)


def build_cash_flow(amount_for_month: Callable[[int], Amount]) -> Tuple[MonthlyPayment, ...]:
    """
    Build the month 0..24 payment schedule with a running total.

    Args:
        amount_for_month: Payment due in a given month

    Returns:
        25 MonthlyPayment entries in ascending month order
    """
    cumulative: Amount = 0
    cash_flow = []
    for month in range(PROJECTION_MONTHS + 1):
        amount = amount_for_month(month)
        cumulative += amount
        cash_flow.append(MonthlyPayment(month=month, amount=amount, cumulative_amount=cumulative))

    return tuple(cash_flow)


def calculate_purchase_option(customer: CustomerInfo, costs: CostComponents) -> PurchaseOption:
    """
    Outright purchase plan.

    Month 0 carries hardware, installation and setup for every store plus the
    first year of software. Month 13 carries the second year's software renewal.
    """
    total_installation = costs.installation_cost_per_store * customer.number_of_stores
    total_setup = costs.setup_service_per_store * customer.number_of_stores
    yearly_service = costs.software_cost_per_year

    month0_cost = costs.hardware_cost + total_installation + total_setup + yearly_service
    month13_cost = yearly_service

    def amount_for_month(month: int) -> Amount:
        if month == 0:
            return month0_cost
        if month == SOFTWARE_RENEWAL_MONTH:
            return month13_cost
        return 0

    return PurchaseOption(
        month0_cost=month0_cost,
        month13_cost=month13_cost,
        total_two_year_cost=month0_cost + month13_cost,
        cash_flow=build_cash_flow(amount_for_month),
    )


def calculate_rental_option(customer: CustomerInfo, costs: CostComponents) -> RentalOption:
    """
    Two-year rental plan.

    Requirements:
    - Base is the purchase cost stretched over two years of software
    - 20% markup amortized over 24 months, rounded once to whole VND
    - Deposit is three months' rent, paid at month 0 and refundable
    - Two-year total excludes the deposit; the cash flow includes it

    Example:
        base 19,300,000 → 19,300,000 * 1.2 / 24 = 965,000 per month
        deposit 2,895,000, total 23,160,000, cumulative at month 24 26,055,000
    """
    total_installation = costs.installation_cost_per_store * customer.number_of_stores
    total_setup = costs.setup_service_per_store * customer.number_of_stores
    two_year_base = costs.hardware_cost + total_installation + total_setup + costs.software_cost_per_year * 2

    # Round before deriving deposit and total so both agree with the schedule
    monthly_rental = _amortize_with_markup(two_year_base)
    deposit = monthly_rental * DEPOSIT_MONTHS

    return RentalOption(
        monthly_rental=monthly_rental,
        deposit=deposit,
        total_two_year_cost=monthly_rental * RENTAL_TERM_MONTHS,
        cash_flow=build_cash_flow(lambda month: deposit if month == 0 else monthly_rental),
    )


def compute_comparison(customer: CustomerInfo, costs: CostComponents) -> CalculationResult:
    """
    Main entry point: compare the purchase and rental plans.

    Pure and total over numeric input. Zero or negative costs and store counts
    are not rejected here; they flow through the arithmetic unchanged.
    """
    return CalculationResult(
        purchase=calculate_purchase_option(customer, costs),
        rental=calculate_rental_option(customer, costs),
    )


def summarize_comparison(result: CalculationResult) -> ComparisonSummary:
    """Difference between the two-year totals and the cheaper plan"""
    difference = result.purchase.total_two_year_cost - result.rental.total_two_year_cost

    rental_total = result.rental.total_two_year_cost
    percentage = abs(difference / rental_total * 100) if rental_total else 0.0

    if difference > 0:
        cheaper_option = "rental"
    elif difference < 0:
        cheaper_option = "purchase"
    else:
        cheaper_option = "equal"

    return ComparisonSummary(
        difference=difference,
        difference_percentage=round(percentage, 1),
        cheaper_option=cheaper_option,
    )

"""Domain models - immutable dataclasses for quote inputs and comparison results"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple, Union

Amount = Union[int, float]


@dataclass(frozen=True)
class CustomerInfo:
    """Customer block collected by the quote form"""

    customer_name: str
    number_of_stores: int
    company_name: Optional[str] = None
    address: Optional[str] = None
    contact: Optional[str] = None


@dataclass(frozen=True)
class CostComponents:
    """Cost inputs in VND"""

    hardware_cost: Amount
    software_cost_per_year: Amount
    installation_cost_per_store: Amount
    setup_service_per_store: Amount


@dataclass(frozen=True)
class MonthlyPayment:
    """Payment due in one month of the projection"""

    month: int
    amount: Amount
    cumulative_amount: Amount


@dataclass(frozen=True)
class PurchaseOption:
    """Outright purchase: everything up front, software renewal at month 13"""

    month0_cost: Amount
    month13_cost: Amount
    total_two_year_cost: Amount
    cash_flow: Tuple[MonthlyPayment, ...]


@dataclass(frozen=True)
class RentalOption:
    """Two-year rental contract with a refundable deposit"""

    monthly_rental: int
    deposit: int
    total_two_year_cost: int  # excludes the refundable deposit
    cash_flow: Tuple[MonthlyPayment, ...]


@dataclass(frozen=True)
class CalculationResult:
    """Output of the cost comparison"""

    purchase: PurchaseOption
    rental: RentalOption


@dataclass(frozen=True)
class ComparisonSummary:
    """Headline difference between the two plans"""

    difference: Amount  # purchase total minus rental total
    difference_percentage: float  # relative to the rental total
    cheaper_option: str  # "purchase" | "rental" | "equal"


@dataclass(frozen=True)
class QuoteData:
    """Quote metadata printed on the exported document"""

    customer: CustomerInfo
    costs: CostComponents
    quote_number: str
    created_at: date
    valid_until: date


@dataclass(frozen=True)
class FormState:
    """Form inputs saved for the current session"""

    customer: CustomerInfo
    costs: CostComponents
    language: str = "vi"

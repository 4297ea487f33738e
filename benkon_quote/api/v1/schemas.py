"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from benkon_quote.config import settings
from benkon_quote.domain.models import CostComponents, CustomerInfo, FormState
from benkon_quote.utils.date_utils import add_days


class CustomerInfoSchema(BaseModel):
    """Customer block of the quote form"""

    model_config = ConfigDict(from_attributes=True)

    # Business rules (non-blank name, at least one store) are checked by
    # domain validation so the errors come back localized
    customer_name: str = Field("", description="Customer name (required for a quote)")
    company_name: Optional[str] = None
    address: Optional[str] = None
    contact: Optional[str] = None
    number_of_stores: int = Field(1, description="Stores to equip")

    def to_domain(self) -> CustomerInfo:
        return CustomerInfo(
            customer_name=self.customer_name,
            company_name=self.company_name,
            address=self.address,
            contact=self.contact,
            number_of_stores=self.number_of_stores,
        )


class CostComponentsSchema(BaseModel):
    """Cost inputs in whole VND"""

    model_config = ConfigDict(from_attributes=True)

    hardware_cost: int
    software_cost_per_year: int
    installation_cost_per_store: int
    setup_service_per_store: int

    def to_domain(self) -> CostComponents:
        return CostComponents(
            hardware_cost=self.hardware_cost,
            software_cost_per_year=self.software_cost_per_year,
            installation_cost_per_store=self.installation_cost_per_store,
            setup_service_per_store=self.setup_service_per_store,
        )


class QuoteRequest(BaseModel):
    """Request body for the /v1/quote endpoints"""

    customer: CustomerInfoSchema
    costs: CostComponentsSchema
    language: Optional[str] = Field(None, description="'vi' or 'en'; falls back to Accept-Language")


class ExportRequest(QuoteRequest):
    """Request body for POST /v1/quote/export"""

    include_charts: bool = True
    issued_on: Optional[date] = Field(None, description="Quote date (default: today)")

    @field_validator("issued_on")
    @classmethod
    def validity_window_in_range(cls, value: Optional[date]) -> Optional[date]:
        """The quote's expiry date must still be a representable date"""
        if value is None:
            return value
        try:
            add_days(value, settings.quote_validity_days)
        except OverflowError:
            raise ValueError(f"quote validity of {settings.quote_validity_days} days runs past {date.max}")
        return value


class MonthlyPaymentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: int
    amount: int
    cumulative_amount: int


class PurchaseOptionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month0_cost: int
    month13_cost: int
    total_two_year_cost: int
    cash_flow: List[MonthlyPaymentSchema]


class RentalOptionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    monthly_rental: int
    deposit: int
    total_two_year_cost: int = Field(..., description="Excludes the refundable deposit")
    cash_flow: List[MonthlyPaymentSchema]


class CalculationResultSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    purchase: PurchaseOptionSchema
    rental: RentalOptionSchema


class ComparisonSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    difference: int
    difference_percentage: float
    cheaper_option: str


class FormattedFiguresSchema(BaseModel):
    """Headline figures rendered for the requested locale"""

    purchase_month0_cost: str
    purchase_month13_cost: str
    purchase_total: str
    rental_monthly: str
    rental_deposit: str
    rental_total: str
    difference: str


class CalculationResponse(BaseModel):
    """Response for POST /v1/quote/calculate"""

    language: str
    result: CalculationResultSchema
    summary: ComparisonSummarySchema
    formatted: FormattedFiguresSchema


class ChartDatasetSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    data: List[int]
    border_color: str
    background_color: str
    fill: bool = False
    tension: Optional[float] = None


class ChartDataSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    labels: List[str]
    datasets: List[ChartDatasetSchema]


class ChartsResponse(BaseModel):
    """Response for POST /v1/quote/charts"""

    payment: ChartDataSchema
    cumulative: ChartDataSchema


class CashFlowRowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: int
    purchase_amount: int
    purchase_cumulative: int
    rental_amount: int
    rental_cumulative: int
    highlighted: bool


class CashFlowResponse(BaseModel):
    """Response for POST /v1/quote/cash-flow"""

    rows: List[CashFlowRowSchema]


class FormStateSchema(BaseModel):
    """Saved form inputs for GET/PUT /v1/form-state"""

    model_config = ConfigDict(from_attributes=True)

    customer: CustomerInfoSchema
    costs: CostComponentsSchema
    language: str = "vi"

    def to_domain(self) -> FormState:
        return FormState(customer=self.customer.to_domain(), costs=self.costs.to_domain(), language=self.language)


def request_to_domain(body: QuoteRequest) -> Tuple[CustomerInfo, CostComponents]:
    return body.customer.to_domain(), body.costs.to_domain()

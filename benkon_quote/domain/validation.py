"""Quote form validation - run by callers before invoking the calculation engine"""

from typing import Dict, Optional

from benkon_quote.domain.exceptions import InvalidQuoteInputError
from benkon_quote.domain.models import CostComponents, CustomerInfo
from benkon_quote.i18n.messages import translate

COST_FIELDS = (
    "hardware_cost",
    "software_cost_per_year",
    "installation_cost_per_store",
    "setup_service_per_store",
)


def validate_quote_inputs(
    customer: CustomerInfo,
    costs: CostComponents,
    locale: Optional[str] = None,
) -> Dict[str, str]:
    """
    Collect field-level errors for the quote form.

    Rules:
    - customer_name must not be blank
    - number_of_stores must be at least 1
    - every cost component must be greater than 0

    Returns:
        Mapping of field name to localized message; empty when inputs are valid
    """
    errors: Dict[str, str] = {}

    if not (customer.customer_name or "").strip():
        errors["customer_name"] = translate("validation.required", locale)

    if customer.number_of_stores < 1:
        errors["number_of_stores"] = translate("validation.min_value", locale)

    for field in COST_FIELDS:
        if getattr(costs, field) <= 0:
            errors[field] = translate("validation.min_value", locale)

    return errors


def ensure_valid_quote_inputs(
    customer: CustomerInfo,
    costs: CostComponents,
    locale: Optional[str] = None,
) -> None:
    """Raise InvalidQuoteInputError carrying every field error"""
    errors = validate_quote_inputs(customer, costs, locale)
    if errors:
        raise InvalidQuoteInputError(errors)

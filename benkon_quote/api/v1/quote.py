"""POST /v1/quote/* - cost comparison, chart series, cash-flow table and PDF export"""

import logging
import time
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.responses import Response

from benkon_quote.api.dependencies import get_accept_language, get_request_id
from benkon_quote.api.v1.schemas import (
    CalculationResponse,
    CalculationResultSchema,
    CashFlowResponse,
    CashFlowRowSchema,
    ChartDataSchema,
    ChartsResponse,
    ComparisonSummarySchema,
    ExportRequest,
    FormattedFiguresSchema,
    QuoteRequest,
    request_to_domain,
)
from benkon_quote.domain.calculations import compute_comparison, summarize_comparison
from benkon_quote.domain.exceptions import DocumentExportError, InvalidQuoteInputError
from benkon_quote.domain.models import CalculationResult, ComparisonSummary, CostComponents, CustomerInfo
from benkon_quote.domain.quotes import create_quote
from benkon_quote.domain.validation import ensure_valid_quote_inputs
from benkon_quote.export.charts import build_cumulative_chart, build_payment_chart
from benkon_quote.export.document import generate_quotation_pdf
from benkon_quote.export.tables import build_cash_flow_rows
from benkon_quote.i18n.messages import normalize_locale, translate
from benkon_quote.infrastructure.observability.logging import log_quote_calculated, log_quote_exported
from benkon_quote.infrastructure.observability.metrics import (
    quote_export_duration_histogram,
    record_calculation,
    record_export,
    record_validation_failure,
)
from benkon_quote.utils.formatters import format_currency

router = APIRouter()


def _validated_inputs(body: QuoteRequest, locale: str, request_id: str) -> Tuple[CustomerInfo, CostComponents]:
    """Convert the body to domain inputs, answering 422 with per-field messages on bad input"""
    customer, costs = request_to_domain(body)
    try:
        ensure_valid_quote_inputs(customer, costs, locale)
    except InvalidQuoteInputError as e:
        record_validation_failure(e.errors)
        logging.warning(f"Quote inputs rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    return customer, costs


def _resolve_locale(body: QuoteRequest, accept_language: Optional[str]) -> str:
    return normalize_locale(body.language or accept_language)


def _formatted_figures(result: CalculationResult, summary: ComparisonSummary, locale: str) -> FormattedFiguresSchema:
    return FormattedFiguresSchema(
        purchase_month0_cost=format_currency(result.purchase.month0_cost, locale),
        purchase_month13_cost=format_currency(result.purchase.month13_cost, locale),
        purchase_total=format_currency(result.purchase.total_two_year_cost, locale),
        rental_monthly=format_currency(result.rental.monthly_rental, locale),
        rental_deposit=format_currency(result.rental.deposit, locale),
        rental_total=format_currency(result.rental.total_two_year_cost, locale),
        difference=format_currency(abs(summary.difference), locale),
    )


@router.post("/quote/calculate", response_model=CalculationResponse)
def calculate_quote(
    body: QuoteRequest,
    request: Request,
    accept_language: Optional[str] = Depends(get_accept_language),
):
    """
    Compare the purchase and rental plans for the submitted inputs.

    Flow:
    1. Validate form inputs (422 with localized field errors)
    2. Compute both plans and their month 0..24 cash flows
    3. Summarize the difference and format headline figures
    """
    start_time = time.time()
    request_id = get_request_id(request)
    locale = _resolve_locale(body, accept_language)

    customer, costs = _validated_inputs(body, locale, request_id)
    result = compute_comparison(customer, costs)
    summary = summarize_comparison(result)

    duration_ms = (time.time() - start_time) * 1000
    record_calculation(summary, customer.number_of_stores)
    log_quote_calculated(
        request_id,
        customer.number_of_stores,
        result.purchase.total_two_year_cost,
        result.rental.total_two_year_cost,
        summary.cheaper_option,
        duration_ms,
    )

    return CalculationResponse(
        language=locale,
        result=CalculationResultSchema.model_validate(result),
        summary=ComparisonSummarySchema.model_validate(summary),
        formatted=_formatted_figures(result, summary, locale),
    )


@router.post("/quote/charts", response_model=ChartsResponse)
def quote_charts(
    body: QuoteRequest,
    request: Request,
    accept_language: Optional[str] = Depends(get_accept_language),
):
    """Monthly payment (bar) and cumulative (line) series for both plans"""
    locale = _resolve_locale(body, accept_language)
    customer, costs = _validated_inputs(body, locale, get_request_id(request))
    result = compute_comparison(customer, costs)

    return ChartsResponse(
        payment=ChartDataSchema.model_validate(build_payment_chart(result, locale)),
        cumulative=ChartDataSchema.model_validate(build_cumulative_chart(result, locale)),
    )


@router.post("/quote/cash-flow", response_model=CashFlowResponse)
def quote_cash_flow(
    body: QuoteRequest,
    request: Request,
    accept_language: Optional[str] = Depends(get_accept_language),
):
    """Month-by-month table of both plans"""
    locale = _resolve_locale(body, accept_language)
    customer, costs = _validated_inputs(body, locale, get_request_id(request))
    result = compute_comparison(customer, costs)

    return CashFlowResponse(rows=[CashFlowRowSchema.model_validate(row) for row in build_cash_flow_rows(result)])


@router.post("/quote/export")
def export_quote(
    body: ExportRequest,
    request: Request,
    accept_language: Optional[str] = Depends(get_accept_language),
):
    """
    Generate the quotation PDF.

    Returns:
        application/pdf attachment named quote-<quote number>.pdf
    """
    start_time = time.time()
    request_id = get_request_id(request)
    locale = _resolve_locale(body, accept_language)

    customer, costs = _validated_inputs(body, locale, request_id)
    result = compute_comparison(customer, costs)
    quote = create_quote(customer, costs, issued_on=body.issued_on)

    try:
        with quote_export_duration_histogram.time():
            pdf = generate_quotation_pdf(quote, result, locale, include_charts=body.include_charts)
    except DocumentExportError as e:
        record_export(False, locale)
        logging.error(f"Quotation export failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail=translate("error.export_failed", locale))

    record_export(True, locale)
    log_quote_exported(request_id, quote.quote_number, locale, len(pdf), (time.time() - start_time) * 1000)

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="quote-{quote.quote_number}.pdf"',
            "X-Quote-Number": quote.quote_number,
        },
    )

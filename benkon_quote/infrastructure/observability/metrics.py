"""Prometheus metrics for quote volume, plan outcomes and export health"""

from prometheus_client import Counter, Histogram

from benkon_quote.domain.models import ComparisonSummary

# Calculation metrics
quote_calculation_counter = Counter(
    "benkon_quote_calculations_total",
    "Total cost comparisons computed",
    ["cheaper_option"],  # purchase | rental | equal
)

quote_validation_failure_counter = Counter(
    "benkon_quote_validation_failures_total",
    "Quote requests rejected by form validation",
    ["field"],
)

store_count_histogram = Histogram(
    "benkon_quote_number_of_stores",
    "Stores per calculated quote",
    buckets=[1, 2, 5, 10, 20, 50, 100],
)

# Export metrics
quote_export_counter = Counter(
    "benkon_quote_exports_total",
    "Quotation documents generated",
    ["outcome", "locale"],  # success | failure
)

quote_export_duration_histogram = Histogram(
    "benkon_quote_export_duration_seconds",
    "Quotation PDF generation time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(summary: ComparisonSummary, number_of_stores: int) -> None:
    """Record which plan came out cheaper and the quote size"""
    quote_calculation_counter.labels(cheaper_option=summary.cheaper_option).inc()
    store_count_histogram.observe(number_of_stores)


def record_validation_failure(fields) -> None:
    for field in fields:
        quote_validation_failure_counter.labels(field=field).inc()


def record_export(success: bool, locale: str) -> None:
    outcome = "success" if success else "failure"
    quote_export_counter.labels(outcome=outcome, locale=locale).inc()

"""Unit tests for quotation PDF export"""

from dataclasses import replace
from datetime import date

import pytest

from benkon_quote.config import settings
from benkon_quote.domain.calculations import compute_comparison
from benkon_quote.domain.exceptions import ChartRenderError, DocumentExportError
from benkon_quote.domain.quotes import create_quote
from benkon_quote.export import document
from benkon_quote.export.document import generate_quotation_pdf


@pytest.fixture
def quote(customer, costs):
    return create_quote(customer, costs, issued_on=date(2026, 10, 19))


@pytest.fixture
def result(customer, costs):
    return compute_comparison(customer, costs)


def _is_pdf(content: bytes) -> bool:
    return content.startswith(b"%PDF") and b"%%EOF" in content[-1024:]


@pytest.mark.parametrize("locale", ["vi", "en"])
def test_generate_quotation_pdf(quote, result, locale):
    """Test a complete document renders in both languages"""
    pdf = generate_quotation_pdf(quote, result, locale)

    assert _is_pdf(pdf)


def test_generate_without_charts(quote, result):
    """Test charts can be left out"""
    with_charts = generate_quotation_pdf(quote, result, "en")
    without_charts = generate_quotation_pdf(quote, result, "en", include_charts=False)

    assert _is_pdf(without_charts)
    assert len(without_charts) < len(with_charts)


def test_optional_customer_fields_may_be_empty(quote, result):
    """Test a customer with only the required fields"""
    bare = replace(quote, customer=replace(quote.customer, company_name=None, address="", contact=None))

    assert _is_pdf(generate_quotation_pdf(bare, result, "vi"))


def test_markup_characters_are_escaped(quote, result):
    """Test names containing XML markup do not break the layout"""
    tricky = replace(quote, customer=replace(quote.customer, customer_name="<b>A & B</b>"))

    assert _is_pdf(generate_quotation_pdf(tricky, result, "en"))


def test_chart_failure_does_not_abort_export(quote, result, monkeypatch):
    """Test a chart that cannot be drawn is omitted and the document still renders"""

    def broken_chart(*args, **kwargs):
        raise ChartRenderError("canvas unavailable")

    monkeypatch.setattr(document, "render_chart", broken_chart)

    assert _is_pdf(generate_quotation_pdf(quote, result, "en"))


def test_missing_font_raises_export_error(quote, result, monkeypatch):
    """Test an unreadable font surfaces as DocumentExportError"""
    monkeypatch.setattr(settings, "pdf_font_path", "/nonexistent/fonts/QuoteSans.ttf")

    with pytest.raises(DocumentExportError):
        generate_quotation_pdf(quote, result, "vi")


def test_font_registration_follows_configured_path(monkeypatch):
    """Test changing pdf_font_path registers the new font instead of reusing the old one"""
    registered = []
    monkeypatch.setattr(document, "_registered_fonts", {})
    monkeypatch.setattr(document, "TTFont", lambda name, path: (name, path))
    monkeypatch.setattr(document.pdfmetrics, "registerFont", registered.append)

    monkeypatch.setattr(settings, "pdf_font_path", "/fonts/DejaVuSans.ttf")
    first = document._resolve_fonts()
    assert document._resolve_fonts() == first

    monkeypatch.setattr(settings, "pdf_font_path", "/fonts/NotoSans.ttf")
    second = document._resolve_fonts()

    assert second != first
    assert (second[0], "/fonts/NotoSans.ttf") in registered
    assert len(registered) == 4

    monkeypatch.setattr(settings, "pdf_font_path", None)
    assert document._resolve_fonts() == ("Helvetica", "Helvetica-Bold")


def test_failed_export_leaves_result_reusable(quote, result, monkeypatch):
    """Test the same result exports cleanly after a failed attempt"""
    snapshot = compute_comparison(quote.customer, quote.costs)

    monkeypatch.setattr(settings, "pdf_font_path", "/nonexistent/fonts/QuoteSans.ttf")
    with pytest.raises(DocumentExportError):
        generate_quotation_pdf(quote, result, "en")

    monkeypatch.setattr(settings, "pdf_font_path", None)
    assert _is_pdf(generate_quotation_pdf(quote, result, "en"))
    assert result == snapshot


def test_large_chain_renders(quote):
    """Test nine-digit figures for a 250-store chain fit the layout"""
    many = replace(quote, customer=replace(quote.customer, number_of_stores=250))
    pdf = generate_quotation_pdf(many, compute_comparison(many.customer, many.costs), "en")

    assert _is_pdf(pdf)

"""
Quotation PDF export.

Lays out the customer block, cost inputs, the purchase/rental comparison, the
24-month cash-flow table, both charts and the terms on A4 pages. The
CalculationResult is read-only here; a failed export can be retried with the
same result.
"""

import html
import io
import logging
import threading
from typing import Dict, List, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.platypus import KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError

from benkon_quote.config import settings
from benkon_quote.domain.calculations import summarize_comparison
from benkon_quote.domain.exceptions import ChartRenderError, DocumentExportError
from benkon_quote.domain.models import CalculationResult, QuoteData
from benkon_quote.export.charts import build_cumulative_chart, build_payment_chart, render_chart
from benkon_quote.export.tables import build_cash_flow_rows
from benkon_quote.i18n.messages import normalize_locale, terms_and_conditions, translate
from benkon_quote.utils.formatters import format_currency, format_date

BRAND_BLUE = colors.HexColor("#0066CC")
PURCHASE_BLUE = colors.HexColor("#3B82F6")
RENTAL_PURPLE = colors.HexColor("#9333EA")
SECTION_FILL = colors.HexColor("#F5F5F5")
HIGHLIGHT_FILL = colors.HexColor("#FFFBEB")
TOTAL_FILL = colors.HexColor("#F1F5F9")
GRID = colors.HexColor("#DDDDDD")
MUTED = colors.HexColor("#666666")

PAGE_MARGIN = 40
CONTENT_WIDTH = A4[0] - 2 * PAGE_MARGIN

FONT_NAME_PREFIX = "QuoteSans"

# pdf_font_path -> (regular, bold) names registered with reportlab
_registered_fonts: Dict[str, Tuple[str, str]] = {}
_font_lock = threading.Lock()


def _resolve_fonts() -> Tuple[str, str]:
    """Register the configured TTF (needed for Vietnamese glyphs) or fall back to Helvetica"""
    font_path = settings.pdf_font_path
    if not font_path:
        return "Helvetica", "Helvetica-Bold"

    with _font_lock:
        if font_path not in _registered_fonts:
            regular = f"{FONT_NAME_PREFIX}{len(_registered_fonts)}"
            bold = f"{regular}-Bold"
            pdfmetrics.registerFont(TTFont(regular, font_path))
            pdfmetrics.registerFont(TTFont(bold, font_path))
            _registered_fonts[font_path] = (regular, bold)
        return _registered_fonts[font_path]


class _Styles:
    """Paragraph styles bound to the resolved fonts"""

    def __init__(self, regular: str, bold: str):
        base = getSampleStyleSheet()
        self.regular = regular
        self.bold = bold
        self.normal = ParagraphStyle("QuoteNormal", parent=base["Normal"], fontName=regular, fontSize=9, leading=12)
        self.small = ParagraphStyle("QuoteSmall", parent=self.normal, fontSize=8, textColor=MUTED)
        self.header = ParagraphStyle(
            "QuoteHeader", parent=self.normal, fontName=bold, fontSize=18, leading=22, textColor=colors.white
        )
        self.header_sub = ParagraphStyle("QuoteHeaderSub", parent=self.normal, fontSize=8, textColor=colors.white)
        self.title = ParagraphStyle(
            "QuoteTitle",
            parent=self.normal,
            fontName=bold,
            fontSize=18,
            leading=22,
            alignment=TA_CENTER,
            textColor=BRAND_BLUE,
            spaceBefore=12,
            spaceAfter=12,
        )
        self.section = ParagraphStyle("QuoteSection", parent=self.normal, fontName=bold, fontSize=11)
        self.cell = ParagraphStyle("QuoteCell", parent=self.normal, fontSize=7.5, leading=9)


def _text(value: Optional[str]) -> str:
    return html.escape(value or "")


def _section(title: str, styles: _Styles) -> Table:
    table = Table([[Paragraph(_text(title), styles.section)]], colWidths=[CONTENT_WIDTH])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), SECTION_FILL),
                ("LINEBEFORE", (0, 0), (0, -1), 4, BRAND_BLUE),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    return table


def _field_table(rows: List[Tuple[str, str]], styles: _Styles) -> Table:
    data = [[Paragraph(f"<b>{_text(label)}:</b>", styles.normal), Paragraph(_text(value), styles.normal)] for label, value in rows]
    table = Table(data, colWidths=[CONTENT_WIDTH * 0.4, CONTENT_WIDTH * 0.6])
    table.setStyle(
        TableStyle(
            [
                ("LINEBELOW", (0, 0), (-1, -1), 0.5, GRID),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    return table


def _header(styles: _Styles) -> Table:
    table = Table(
        [
            [Paragraph(_text(settings.company_name), styles.header)],
            [Paragraph(_text(settings.company_website), styles.header_sub)],
        ],
        colWidths=[CONTENT_WIDTH],
    )
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), BRAND_BLUE),
                ("LEFTPADDING", (0, 0), (-1, -1), 12),
                ("TOPPADDING", (0, 0), (-1, 0), 10),
                ("BOTTOMPADDING", (0, -1), (-1, -1), 10),
            ]
        )
    )
    return table


def _quote_info(quote: QuoteData, locale: str, styles: _Styles) -> Table:
    cells = [
        f"{translate('doc.quote_number', locale)}: {quote.quote_number}",
        f"{translate('doc.date', locale)}: {format_date(quote.created_at, locale)}",
        f"{translate('doc.valid_until', locale)}: {format_date(quote.valid_until, locale)}",
    ]
    return Table([[Paragraph(_text(cell), styles.small) for cell in cells]], colWidths=[CONTENT_WIDTH / 3] * 3)


def _customer_rows(quote: QuoteData, locale: str) -> List[Tuple[str, str]]:
    customer = quote.customer
    rows = [
        (translate("doc.customer_name", locale), customer.customer_name),
        (translate("doc.company", locale), customer.company_name),
        (translate("doc.address", locale), customer.address),
        (translate("doc.contact", locale), customer.contact),
        (translate("doc.number_of_stores", locale), str(customer.number_of_stores)),
    ]
    # Optional fields left blank on the form are not printed
    return [(label, value) for label, value in rows if value]


def _cost_rows(quote: QuoteData, locale: str) -> List[Tuple[str, str]]:
    costs = quote.costs
    return [
        (translate("doc.hardware_cost", locale), format_currency(costs.hardware_cost, locale)),
        (translate("doc.software_cost", locale), format_currency(costs.software_cost_per_year, locale)),
        (translate("doc.installation_cost", locale), format_currency(costs.installation_cost_per_store, locale)),
        (translate("doc.setup_service", locale), format_currency(costs.setup_service_per_store, locale)),
    ]


def _comparison(result: CalculationResult, locale: str, styles: _Styles) -> Table:
    purchase, rental = result.purchase, result.rental
    purchase_lines = [
        f"<b>{_text(translate('doc.purchase_heading', locale))}</b>",
        f"{_text(translate('doc.initial_payment', locale))}: {format_currency(purchase.month0_cost, locale)}",
        f"{_text(translate('doc.year_two', locale))}: {format_currency(purchase.month13_cost, locale)}",
        f"<b>{_text(translate('doc.total', locale))}: {format_currency(purchase.total_two_year_cost, locale)}</b>",
    ]
    rental_lines = [
        f"<b>{_text(translate('doc.rental_heading', locale))}</b>",
        f"{_text(translate('doc.deposit', locale))}: {format_currency(rental.deposit, locale)}",
        f"{_text(translate('doc.monthly', locale))}: {format_currency(rental.monthly_rental, locale)}",
        f"<b>{_text(translate('doc.total', locale))}: {format_currency(rental.total_two_year_cost, locale)}</b>"
        f"<br/>{_text(translate('doc.excl_deposit', locale))}",
    ]
    table = Table(
        [[Paragraph("<br/>".join(purchase_lines), styles.normal), Paragraph("<br/>".join(rental_lines), styles.normal)]],
        colWidths=[CONTENT_WIDTH / 2] * 2,
    )
    table.setStyle(
        TableStyle(
            [
                ("BOX", (0, 0), (0, 0), 1, PURCHASE_BLUE),
                ("BOX", (1, 0), (1, 0), 1, RENTAL_PURPLE),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("TOPPADDING", (0, 0), (-1, -1), 8),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
            ]
        )
    )
    return table


def _summary(result: CalculationResult, locale: str, styles: _Styles) -> List[Paragraph]:
    summary = summarize_comparison(result)
    return [
        Paragraph(f"<b>{_text(translate('doc.summary_section', locale))}</b>", styles.normal),
        Paragraph(
            f"{_text(translate('option.purchase', locale))}: "
            f"<b>{format_currency(result.purchase.total_two_year_cost, locale)}</b>",
            styles.normal,
        ),
        Paragraph(
            f"{_text(translate('option.rental', locale))}: "
            f"<b>{format_currency(result.rental.total_two_year_cost, locale)}</b> "
            f"{_text(translate('doc.excl_deposit', locale))}",
            styles.normal,
        ),
        Paragraph(
            f"{_text(translate('doc.best_option', locale))}: "
            f"<b>{_text(translate('option.' + summary.cheaper_option, locale))}</b> | "
            f"{_text(translate('doc.difference', locale))}: {format_currency(abs(summary.difference), locale)} "
            f"({summary.difference_percentage:.1f}%)",
            styles.normal,
        ),
    ]


def _cash_flow_table(result: CalculationResult, locale: str, styles: _Styles) -> Table:
    def cell(text: str) -> Paragraph:
        return Paragraph(_text(text), styles.cell)

    month_label = translate("doc.month", locale)
    data = [
        [cell(month_label), cell(translate("option.purchase", locale)), "", cell(translate("option.rental", locale)), ""],
        [
            "",
            cell(translate("doc.amount", locale)),
            cell(translate("doc.cumulative", locale)),
            cell(translate("doc.amount", locale)),
            cell(translate("doc.cumulative", locale)),
        ],
    ]

    rows = build_cash_flow_rows(result)
    highlight_commands = []
    for row in rows:
        label = f"{month_label} {row.month}"
        if row.month == 0:
            label += f" ({translate('doc.now', locale)})"
        data.append(
            [
                label,
                format_currency(row.purchase_amount, locale) if row.purchase_amount > 0 else "-",
                format_currency(row.purchase_cumulative, locale),
                format_currency(row.rental_amount, locale) if row.rental_amount > 0 else "-",
                format_currency(row.rental_cumulative, locale),
            ]
        )
        if row.highlighted:
            table_row = len(data) - 1
            highlight_commands.append(("BACKGROUND", (0, table_row), (-1, table_row), HIGHLIGHT_FILL))

    data.append(
        [
            translate("doc.total", locale),
            format_currency(result.purchase.total_two_year_cost, locale),
            "",
            format_currency(result.rental.total_two_year_cost, locale),
            "",
        ]
    )

    first_col = CONTENT_WIDTH * 0.2
    other_col = (CONTENT_WIDTH - first_col) / 4
    # Header rows repeat on every page the table spans
    table = Table(data, colWidths=[first_col] + [other_col] * 4, repeatRows=2)
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), styles.regular),
                ("FONTSIZE", (0, 0), (-1, -1), 7.5),
                ("SPAN", (1, 0), (2, 0)),
                ("SPAN", (3, 0), (4, 0)),
                ("SPAN", (0, 0), (0, 1)),
                ("SPAN", (1, -1), (2, -1)),
                ("SPAN", (3, -1), (4, -1)),
                ("ALIGN", (1, 2), (-1, -1), "RIGHT"),
                ("TEXTCOLOR", (1, 2), (1, -2), PURCHASE_BLUE),
                ("TEXTCOLOR", (3, 2), (3, -2), RENTAL_PURPLE),
                ("LINEBELOW", (0, 0), (-1, -1), 0.25, GRID),
                ("BACKGROUND", (0, -1), (-1, -1), TOTAL_FILL),
                ("FONTNAME", (0, -1), (-1, -1), styles.bold),
            ]
            + highlight_commands
        )
    )
    return table


def _charts(result: CalculationResult, locale: str, styles: _Styles) -> list:
    """Chart flowables; a chart that fails to draw is left out of the document"""
    flowables = []
    sections = (
        ("doc.payment_chart_section", build_payment_chart, "bar"),
        ("doc.cumulative_chart_section", build_cumulative_chart, "line"),
    )
    for title_key, build, kind in sections:
        try:
            drawing = render_chart(build(result, locale), kind=kind, width=CONTENT_WIDTH, font_name=styles.regular)
        except ChartRenderError as e:
            logging.warning(f"Chart omitted from quotation: {e}", extra={"chart": kind})
            continue
        flowables.append(KeepTogether([_section(translate(title_key, locale), styles), Spacer(1, 6), drawing]))
        flowables.append(Spacer(1, 12))
    return flowables


def _page_footer(font_name: str):
    def draw(canvas, doc):
        canvas.saveState()
        canvas.setFont(font_name, 7)
        canvas.setFillColor(MUTED)
        canvas.drawString(PAGE_MARGIN, PAGE_MARGIN / 2, f"{settings.company_name} | {settings.company_website} | {settings.company_email}")
        canvas.drawRightString(A4[0] - PAGE_MARGIN, PAGE_MARGIN / 2, str(doc.page))
        canvas.restoreState()

    return draw


def generate_quotation_pdf(
    quote: QuoteData,
    result: CalculationResult,
    locale: Optional[str] = None,
    include_charts: bool = True,
) -> bytes:
    """
    Render the quotation as a paginated A4 PDF.

    Args:
        quote: Customer, cost inputs, quote number and validity window
        result: Comparison computed from the same inputs
        locale: 'vi' or 'en' (default from settings)
        include_charts: Add the monthly payment and cumulative charts

    Returns:
        PDF file contents

    Raises:
        DocumentExportError: When fonts cannot be loaded or layout fails
    """
    locale = normalize_locale(locale)

    try:
        regular, bold = _resolve_fonts()
        styles = _Styles(regular, bold)

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=PAGE_MARGIN,
            rightMargin=PAGE_MARGIN,
            topMargin=PAGE_MARGIN,
            bottomMargin=PAGE_MARGIN,
            title=f"{translate('doc.title', locale)} {quote.quote_number}",
            author=settings.company_name,
        )

        story = [
            _header(styles),
            Paragraph(_text(translate("doc.title", locale)), styles.title),
            _quote_info(quote, locale, styles),
            Spacer(1, 0.2 * inch),
            _section(translate("doc.customer_section", locale), styles),
            Spacer(1, 6),
            _field_table(_customer_rows(quote, locale), styles),
            Spacer(1, 0.2 * inch),
            _section(translate("doc.cost_section", locale), styles),
            Spacer(1, 6),
            _field_table(_cost_rows(quote, locale), styles),
            Spacer(1, 0.2 * inch),
            _section(translate("doc.comparison_section", locale), styles),
            Spacer(1, 6),
            _comparison(result, locale, styles),
            Spacer(1, 0.15 * inch),
            *_summary(result, locale, styles),
            Spacer(1, 0.2 * inch),
            _section(translate("doc.cash_flow_section", locale), styles),
            Spacer(1, 6),
            _cash_flow_table(result, locale, styles),
            Spacer(1, 0.2 * inch),
        ]

        if include_charts:
            story.extend(_charts(result, locale, styles))

        story.append(_section(translate("doc.terms_section", locale), styles))
        story.append(Spacer(1, 6))
        for term in terms_and_conditions(locale):
            story.append(Paragraph(f"• {_text(term)}", styles.normal))

        footer = _page_footer(regular)
        doc.build(story, onFirstPage=footer, onLaterPages=footer)

    except (LayoutError, TTFError, OSError, ValueError, TypeError) as e:
        raise DocumentExportError(f"{translate('error.export_failed', locale)} ({e})") from e

    return buffer.getvalue()

"""Chart series built from the cash-flow schedules, and their reportlab drawings"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from reportlab.graphics.charts.barcharts import VerticalBarChart
from reportlab.graphics.charts.legends import Legend
from reportlab.graphics.charts.linecharts import HorizontalLineChart
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors

from benkon_quote.domain.exceptions import ChartRenderError
from benkon_quote.domain.models import Amount, CalculationResult
from benkon_quote.i18n.messages import translate

PURCHASE_COLOR = "rgb(59, 130, 246)"
RENTAL_COLOR = "rgb(147, 51, 234)"

_RGB_PATTERN = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)")


@dataclass(frozen=True)
class ChartDataset:
    """One plotted series"""

    label: str
    data: Tuple[Amount, ...]
    border_color: str
    background_color: str
    fill: bool = False
    tension: Optional[float] = None


@dataclass(frozen=True)
class ChartData:
    """Labels plus one dataset per plan"""

    labels: Tuple[str, ...]
    datasets: Tuple[ChartDataset, ...]


def _with_alpha(rgb: str, alpha: float) -> str:
    return rgb.replace("rgb(", "rgba(").replace(")", f", {alpha})")


def build_payment_chart(result: CalculationResult, locale: Optional[str] = None) -> ChartData:
    """Bar series of the amount due each month, labelled 0..24"""
    return ChartData(
        labels=tuple(str(payment.month) for payment in result.purchase.cash_flow),
        datasets=(
            ChartDataset(
                label=translate("option.purchase", locale),
                data=tuple(payment.amount for payment in result.purchase.cash_flow),
                border_color=PURCHASE_COLOR,
                background_color=_with_alpha(PURCHASE_COLOR, 0.8),
            ),
            ChartDataset(
                label=translate("option.rental", locale),
                data=tuple(payment.amount for payment in result.rental.cash_flow),
                border_color=RENTAL_COLOR,
                background_color=_with_alpha(RENTAL_COLOR, 0.8),
            ),
        ),
    )


def build_cumulative_chart(result: CalculationResult, locale: Optional[str] = None) -> ChartData:
    """Line series of the running totals; month 0 is labelled 'Now'"""
    labels = tuple(
        translate("chart.now", locale) if payment.month == 0 else f"{translate('chart.month', locale)} {payment.month}"
        for payment in result.purchase.cash_flow
    )
    return ChartData(
        labels=labels,
        datasets=(
            ChartDataset(
                label=translate("chart.purchase_cumulative", locale),
                data=tuple(payment.cumulative_amount for payment in result.purchase.cash_flow),
                border_color=PURCHASE_COLOR,
                background_color=_with_alpha(PURCHASE_COLOR, 0.1),
                fill=True,
                tension=0.1,
            ),
            ChartDataset(
                label=translate("chart.rental_cumulative", locale),
                data=tuple(payment.cumulative_amount for payment in result.rental.cash_flow),
                border_color=RENTAL_COLOR,
                background_color=_with_alpha(RENTAL_COLOR, 0.1),
                fill=True,
                tension=0.1,
            ),
        ),
    )


def parse_css_color(value: str) -> colors.Color:
    """'rgb(59, 130, 246)' / 'rgba(59, 130, 246, 0.8)' → reportlab Color"""
    match = _RGB_PATTERN.fullmatch(value.strip())
    if not match:
        raise ChartRenderError(f"Unsupported color: {value}")
    red, green, blue, alpha = match.groups()
    return colors.Color(int(red) / 255, int(green) / 255, int(blue) / 255, alpha=float(alpha) if alpha else 1)


def _millions(value: float) -> str:
    return f"{value / 1_000_000:g}M"


def _value_range(chart: ChartData) -> Tuple[float, float]:
    values = [value for dataset in chart.datasets for value in dataset.data]
    low = min(min(values, default=0), 0)
    high = max(values, default=0)
    # reportlab needs a non-empty value axis
    if high <= low:
        high = low + 1
    return low, high


def render_chart(
    chart: ChartData,
    kind: str = "bar",
    width: float = 500,
    height: float = 220,
    font_name: str = "Helvetica",
) -> Drawing:
    """
    Draw a bar (monthly amounts) or line (cumulative) chart.

    Raises:
        ChartRenderError: On unknown kind, empty series, or a reportlab failure
    """
    if kind not in ("bar", "line"):
        raise ChartRenderError(f"Unknown chart kind: {kind}")
    if not chart.datasets or not chart.labels:
        raise ChartRenderError("Chart has no data")

    try:
        drawing = Drawing(width, height)
        plot = VerticalBarChart() if kind == "bar" else HorizontalLineChart()
        plot.x = 50
        plot.y = 45
        plot.width = width - 70
        plot.height = height - 80
        plot.data = [tuple(dataset.data) for dataset in chart.datasets]

        plot.categoryAxis.categoryNames = list(chart.labels)
        plot.categoryAxis.labels.fontName = font_name
        plot.categoryAxis.labels.fontSize = 6
        if kind == "line":
            plot.categoryAxis.labels.angle = 45
            plot.categoryAxis.labels.boxAnchor = "ne"

        low, high = _value_range(chart)
        plot.valueAxis.valueMin = low
        plot.valueAxis.valueMax = high
        plot.valueAxis.labelTextFormat = _millions
        plot.valueAxis.labels.fontName = font_name
        plot.valueAxis.labels.fontSize = 7

        legend_pairs: List[Tuple[colors.Color, str]] = []
        for index, dataset in enumerate(chart.datasets):
            stroke = parse_css_color(dataset.border_color)
            if kind == "bar":
                plot.bars[index].fillColor = parse_css_color(dataset.background_color)
                plot.bars[index].strokeColor = stroke
            else:
                plot.lines[index].strokeColor = stroke
                plot.lines[index].strokeWidth = 2
            legend_pairs.append((stroke, dataset.label))

        legend = Legend()
        legend.x = 50
        legend.y = height - 10
        legend.alignment = "right"
        legend.columnMaximum = 1
        legend.deltax = 160
        legend.fontName = font_name
        legend.fontSize = 8
        legend.colorNamePairs = legend_pairs

        drawing.add(plot)
        drawing.add(legend)
        return drawing

    except ChartRenderError:
        raise
    except (ValueError, TypeError, AttributeError, IndexError) as e:
        raise ChartRenderError(f"Failed to draw {kind} chart: {e}") from e

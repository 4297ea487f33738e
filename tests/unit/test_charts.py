"""Unit tests for chart series, chart drawings and cash-flow table rows"""

import pytest
from reportlab.graphics.shapes import Drawing

from benkon_quote.domain.calculations import compute_comparison
from benkon_quote.domain.exceptions import ChartRenderError
from benkon_quote.export.charts import (
    ChartData,
    build_cumulative_chart,
    build_payment_chart,
    parse_css_color,
    render_chart,
)
from benkon_quote.export.tables import build_cash_flow_rows


@pytest.fixture
def result(customer, costs):
    return compute_comparison(customer, costs)


def test_payment_chart_uses_monthly_amounts(result):
    """Test bar series: labels 0..24 and the amount due each month"""
    chart = build_payment_chart(result, "en")

    assert chart.labels == tuple(str(month) for month in range(25))
    purchase, rental = chart.datasets
    assert purchase.label == "Direct Purchase"
    assert rental.label == "Contract Rental"
    assert purchase.data[0] == 14_300_000
    assert purchase.data[13] == 5_000_000
    assert rental.data[0] == 2_895_000
    assert rental.data[1] == 965_000
    assert purchase.background_color == "rgba(59, 130, 246, 0.8)"


def test_cumulative_chart_uses_running_totals(result):
    """Test line series: 'Now' then 'Month i' labels and cumulative amounts"""
    chart = build_cumulative_chart(result, "vi")

    assert chart.labels[0] == "Hiện tại"
    assert chart.labels[24] == "Tháng 24"
    purchase, rental = chart.datasets
    assert purchase.data[-1] == 19_300_000
    assert rental.data[-1] == 26_055_000
    assert purchase.fill is True
    assert rental.tension == 0.1


@pytest.mark.parametrize("kind", ["bar", "line"])
def test_render_chart_returns_drawing(result, kind):
    """Test both chart kinds produce a reportlab drawing"""
    chart = build_payment_chart(result) if kind == "bar" else build_cumulative_chart(result)
    drawing = render_chart(chart, kind=kind, width=400, height=200)

    assert isinstance(drawing, Drawing)
    assert drawing.width == 400


def test_render_chart_rejects_unknown_kind(result):
    """Test an unsupported chart kind raises ChartRenderError"""
    with pytest.raises(ChartRenderError):
        render_chart(build_payment_chart(result), kind="pie")


def test_render_chart_rejects_empty_chart():
    """Test a chart with no series raises ChartRenderError"""
    with pytest.raises(ChartRenderError):
        render_chart(ChartData(labels=(), datasets=()))


def test_parse_css_color():
    """Test rgb/rgba strings map to reportlab colors"""
    color = parse_css_color("rgba(147, 51, 234, 0.8)")

    assert color.red == pytest.approx(147 / 255)
    assert color.alpha == pytest.approx(0.8)

    with pytest.raises(ChartRenderError):
        parse_css_color("#9333EA")


def test_cash_flow_rows_pair_both_plans(result):
    """Test 25 rows with highlights at months 0, 13 and 24"""
    rows = build_cash_flow_rows(result)

    assert len(rows) == 25
    assert [row.month for row in rows if row.highlighted] == [0, 13, 24]
    assert rows[13].purchase_amount == 5_000_000
    assert rows[13].purchase_cumulative == 19_300_000
    assert rows[24].rental_cumulative == 26_055_000
    assert rows[5].purchase_amount == 0

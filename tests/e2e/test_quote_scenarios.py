"""
E2E tests walking customer scenarios through the whole quoting flow.

Each scenario autosaves the form, calculates, and exports the quotation the
way the web form does, checking the figures a sales rep would read out.

Scenarios:
- single_cafe: one store at list prices, purchase is cheaper over two years
- regional_chain: three stores, per-store costs multiply
- english_quote: same inputs quoted in English
- retry_export: export retried after a failed attempt with the same result
"""

import pytest
from fastapi.testclient import TestClient


def _payload(stores: int, language: str = "vi") -> dict:
    return {
        "customer": {
            "customer_name": "Trần Thị Bình",
            "company_name": "Chuỗi Bánh Mì Bình",
            "number_of_stores": stores,
        },
        "costs": {
            "hardware_cost": 6500000,
            "software_cost_per_year": 5000000,
            "installation_cost_per_store": 1600000,
            "setup_service_per_store": 1200000,
        },
        "language": language,
    }


@pytest.mark.e2e
def test_single_cafe_quote(client: TestClient):
    """
    single_cafe: default bundle for one store
    Expected: 14.3M up front, 965k/month rental, purchase cheaper
    """
    headers = {"X-Session-ID": "single-cafe"}
    payload = _payload(stores=1)

    state = {key: payload[key] for key in ("customer", "costs", "language")}
    assert client.put("/v1/form-state", json=state, headers=headers).status_code == 200

    saved = client.get("/v1/form-state", headers=headers).json()
    calculation = client.post("/v1/quote/calculate", json={**saved}).json()

    assert calculation["formatted"]["purchase_month0_cost"] == "14.300.000 VNĐ"
    assert calculation["formatted"]["rental_monthly"] == "965.000 VNĐ"
    assert calculation["formatted"]["rental_deposit"] == "2.895.000 VNĐ"
    assert calculation["summary"]["cheaper_option"] == "purchase"

    export = client.post("/v1/quote/export", json=payload, headers=headers)
    assert export.status_code == 200
    assert export.content.startswith(b"%PDF")


@pytest.mark.e2e
def test_regional_chain_quote(client: TestClient):
    """
    regional_chain: three stores
    Expected: installation and setup triple, renewal unchanged
    """
    data = client.post("/v1/quote/calculate", json=_payload(stores=3)).json()
    purchase = data["result"]["purchase"]
    rental = data["result"]["rental"]

    assert purchase["month0_cost"] == 19900000
    assert purchase["month13_cost"] == 5000000
    assert [entry["amount"] for entry in purchase["cash_flow"]].count(0) == 23

    # (6.5M + 4.8M + 3.6M + 10M) * 1.2 / 24
    assert rental["monthly_rental"] == 1245000
    assert rental["total_two_year_cost"] == 1245000 * 24
    assert rental["cash_flow"][24]["cumulative_amount"] == rental["total_two_year_cost"] + rental["deposit"]


@pytest.mark.e2e
def test_english_quote(client: TestClient):
    """
    english_quote: same one-store inputs in English
    Expected: dong-symbol formatting and English chart labels
    """
    calculation = client.post("/v1/quote/calculate", json=_payload(stores=1, language="en")).json()
    charts = client.post("/v1/quote/charts", json=_payload(stores=1, language="en")).json()

    assert calculation["formatted"]["rental_total"] == "₫23,160,000"
    assert charts["cumulative"]["labels"][:2] == ["Now", "Month 1"]
    assert charts["payment"]["datasets"][1]["label"] == "Contract Rental"


@pytest.mark.e2e
def test_retry_export_after_failure(client: TestClient, monkeypatch):
    """
    retry_export: first export fails, the retry succeeds
    Expected: 500 then a PDF, figures unchanged between calls
    """
    from benkon_quote.config import settings

    payload = _payload(stores=2)
    before = client.post("/v1/quote/calculate", json=payload).json()

    monkeypatch.setattr(settings, "pdf_font_path", "/nonexistent/fonts/QuoteSans.ttf")
    assert client.post("/v1/quote/export", json=payload).status_code == 500

    monkeypatch.setattr(settings, "pdf_font_path", None)
    assert client.post("/v1/quote/export", json=payload).status_code == 200

    after = client.post("/v1/quote/calculate", json=payload).json()
    assert after["result"] == before["result"]

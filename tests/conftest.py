"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient

from benkon_quote.api.dependencies import get_form_state_store
from benkon_quote.api.main import create_app
from benkon_quote.domain.models import CostComponents, CustomerInfo
from benkon_quote.infrastructure.state.repositories import SessionFormStateStore


@pytest.fixture
def form_state_store() -> SessionFormStateStore:
    """Fresh session store per test"""
    return SessionFormStateStore()


@pytest.fixture
def client(form_state_store: SessionFormStateStore) -> TestClient:
    """Create FastAPI test client with an isolated form-state store"""
    app = create_app()
    app.dependency_overrides[get_form_state_store] = lambda: form_state_store
    return TestClient(app)


@pytest.fixture
def customer() -> CustomerInfo:
    """Single-store customer"""
    return CustomerInfo(
        customer_name="Nguyễn Văn An",
        company_name="Cà Phê Sáng",
        address="12 Lê Lợi, Quận 1, TP.HCM",
        contact="0901 234 567",
        number_of_stores=1,
    )


@pytest.fixture
def costs() -> CostComponents:
    """Default form costs (VND)"""
    return CostComponents(
        hardware_cost=6_500_000,
        software_cost_per_year=5_000_000,
        installation_cost_per_store=1_600_000,
        setup_service_per_store=1_200_000,
    )


@pytest.fixture
def quote_payload() -> dict:
    """Request body with the default form costs"""
    return {
        "customer": {
            "customer_name": "Nguyễn Văn An",
            "company_name": "Cà Phê Sáng",
            "address": "12 Lê Lợi, Quận 1, TP.HCM",
            "contact": "0901 234 567",
            "number_of_stores": 1,
        },
        "costs": {
            "hardware_cost": 6500000,
            "software_cost_per_year": 5000000,
            "installation_cost_per_store": 1600000,
            "setup_service_per_store": 1200000,
        },
    }

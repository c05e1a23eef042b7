import pytest
from fastapi.testclient import TestClient

from evictiontracker.main import app


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def payload():
    return {
        "submission": {
            "tenant_id": "T1",
            "no_right_of_redemption": False,
            "amount_owed": "500.00",
            "court_case_number": "D-01-LT-24-012345",
            "warrant_order_date": "2024-12-20",
            "scheduled_eviction_date": "2025-02-01",
            "signer_name": "Jane Landlord",
        },
        "account": {
            "landlord_id": "LL1",
            "price_overrides": {"Baltimore City": {"price": "150.00", "unlocked": True}},
        },
        "tenants": [{"tenant_id": "T1", "property_id": "P1", "rent_amount": "1000.00"}],
        "properties": [
            {"property_id": "P1", "region": "Baltimore City", "property_type": "Residential"}
        ],
        "cases": [],
        "now": "2025-01-01T12:00:00Z",
    }

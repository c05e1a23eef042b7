from __future__ import annotations

import copy
from datetime import date, datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
import yaml

import evictiontracker.intake.rule_types  # noqa: F401 (register all rules)

from evictiontracker.config import DEFAULT_RULESET_PATH
from evictiontracker.core.contracts import InMemoryCatalog
from evictiontracker.intake.domain.models import (
    Account,
    CaseLedger,
    Property,
    PropertyType,
    RegionPrice,
    Tenant,
)
from evictiontracker.intake.engine.context import IntakeContext
from evictiontracker.intake.engine.intake_engine import IntakeEngine
from evictiontracker.intake.validators.submission import validate_submission

D = Decimal

TZ_NAME = "America/New_York"
REGION = "Baltimore City"


@pytest.fixture
def fixed_now():
    # 07:00 in New York, so "today" is 2025-01-01 there as well
    return datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def today():
    return date(2025, 1, 1)


@pytest.fixture
def tz():
    return ZoneInfo(TZ_NAME)


@pytest.fixture
def ruleset_dict():
    with open(DEFAULT_RULESET_PATH, "r", encoding="utf-8") as f:
        return copy.deepcopy(yaml.safe_load(f))


@pytest.fixture
def engine():
    # Uses the real packaged YAML ruleset (also validates it against the JSON schema)
    return IntakeEngine.from_yaml_file(DEFAULT_RULESET_PATH, tz=TZ_NAME)


@pytest.fixture
def account():
    return Account(
        landlord_id="LL1",
        price_overrides={REGION: RegionPrice(price=D("150.00"), unlocked=True)},
    )


@pytest.fixture
def tenant():
    return Tenant(tenant_id="T1", property_id="P1", rent_amount=D("1000.00"))


@pytest.fixture
def prop():
    return Property(
        property_id="P1", region=REGION, property_type=PropertyType.RESIDENTIAL
    )


@pytest.fixture
def catalog(tenant, prop):
    return InMemoryCatalog.of(tenants=[tenant], properties=[prop])


@pytest.fixture
def ledger():
    return CaseLedger()


@pytest.fixture
def submission():
    # Valid FTPR submission relative to fixed_now (eviction 31 days out)
    return {
        "tenant_id": "T1",
        "no_right_of_redemption": False,
        "amount_owed": "500.00",
        "court_case_number": "D-01-LT-24-012345",
        "warrant_order_date": "2024-12-20",
        "scheduled_eviction_date": "2025-02-01",
        "signer_name": "Jane Landlord",
    }


@pytest.fixture
def ctx(submission, account, ledger, tenant, prop, today, tz):
    # Minimal ctx for unit-testing rules directly; rule tests override fields
    validated, violations = validate_submission(submission)
    assert violations == []
    return IntakeContext(
        submission=validated,
        account=account,
        ledger=ledger,
        today=today,
        tz=tz,
        tenant=tenant,
        prop=prop,
    )

import pytest
from pydantic import ValidationError

from evictiontracker.intake.schemas.intake_input_v1 import IntakeEvaluateInputV1
from evictiontracker.intake.schemas.intake_output_v1 import IntakeDecisionOutputV1


def test_admitted_output_shape(engine, submission, account, catalog, ledger, fixed_now):
    decision = engine.decide(submission, account, catalog, ledger, now=fixed_now)

    out = IntakeDecisionOutputV1.from_decision(decision).model_dump()

    assert out["version"] == "v1"
    assert out["status"] == "admitted"
    assert out["violations"] == []
    assert out["draft"]["price"] == "150.00"
    assert out["draft"]["amount_owed"] == "500.00"
    assert out["draft"]["scheduled_eviction_date"] == "2025-02-01"
    assert out["draft"]["status"] == "Notice Draft"
    assert out["draft"]["payment_status"] == "Unpaid"
    assert set(out["trace"][0]) == {"rule_id", "rule_type", "title", "stage", "decision", "meta"}


def test_rejected_output_shape(engine, submission, catalog, ledger, fixed_now):
    decision = engine.decide(submission, None, catalog, ledger, now=fixed_now)

    out = IntakeDecisionOutputV1.from_decision(decision).model_dump()

    assert out["status"] == "rejected"
    assert out["draft"] is None
    assert out["violations"] == [
        {
            "field": None,
            "code": "UNAUTHENTICATED",
            "kind": "CONTEXT",
            "message": "You must be logged in to submit a request.",
        }
    ]


def test_output_forbids_extra_top_level_fields():
    with pytest.raises(ValidationError):
        IntakeDecisionOutputV1(ruleset_version="x", status="admitted", payload={})


def test_input_submission_is_allowlisted():
    with pytest.raises(ValidationError):
        IntakeEvaluateInputV1.model_validate({"submission": {"tenant_id": "T1", "is_admin": True}})


def test_input_builds_snapshots():
    payload = IntakeEvaluateInputV1.model_validate(
        {
            "submission": {"tenant_id": "T1"},
            "account": {
                "landlord_id": "LL1",
                "price_overrides": {"Baltimore City": {"price": "150", "unlocked": True}},
                "referral_code": "",
            },
            "tenants": [{"tenant_id": "T1", "property_id": "P1", "rent_amount": "900"}],
            "properties": [{"property_id": "P1", "region": "Baltimore City", "property_type": "residential"}],
            "cases": [{"tenant_id": "T1", "payment_status": "UNPAID", "status": "In_Review"}],
        }
    )

    account = payload.account.to_domain()
    assert account.referral_code is None
    assert account.price_overrides["Baltimore City"].unlocked is True
    assert payload.catalog().get_property("P1").property_type.value == "Residential"
    assert payload.ledger().cases[0].status == "in review"
    assert payload.raw_submission() == {"tenant_id": "T1"}


def test_input_tenant_ids_share_the_submission_rule():
    ok = IntakeEvaluateInputV1.model_validate(
        {"submission": {}, "tenants": [{"tenant_id": " org/42 ", "property_id": "P 1"}]}
    )
    assert ok.tenants[0].tenant_id == "org/42"

    with pytest.raises(ValidationError):
        IntakeEvaluateInputV1.model_validate(
            {"submission": {}, "tenants": [{"tenant_id": "T" * 65, "property_id": "P1"}]}
        )

from datetime import date, datetime
from decimal import Decimal

import pytest

from evictiontracker.intake.constants import ID_MAX_LENGTH
from evictiontracker.intake.domain.violations import ViolationCode, ViolationKind
from evictiontracker.intake.validators.fields import FieldKind, FieldRule, validate, validate_record

D = Decimal


def test_text_is_trimmed():
    out = validate("signer_name", "  Jane  ", FieldRule(FieldKind.TEXT, "Signature", required=True))

    assert out.valid
    assert out.value == "Jane"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_required_text_missing(raw):
    out = validate("signer_name", raw, FieldRule(FieldKind.TEXT, "Signature", required=True))

    assert not out.valid
    assert out.code == ViolationCode.REQUIRED
    assert out.message == "Signature is required"


def test_optional_absent_uses_default():
    out = validate("notice_document", None, FieldRule(FieldKind.REFERENCE, "Notice"))

    assert out.valid
    assert out.value is None


def test_text_too_long():
    out = validate("x", "a" * 101, FieldRule(FieldKind.TEXT, "Case", max_length=100))

    assert out.code == ViolationCode.TOO_LONG


def test_text_too_short():
    out = validate("x", "ab", FieldRule(FieldKind.TEXT, "Code", min_length=3))

    assert out.code == ViolationCode.TOO_SHORT


@pytest.mark.parametrize("raw", ["T 1", "org/42", " T1 "])
def test_identifier_is_matched_verbatim_after_trimming(raw):
    out = validate("tenant_id", raw, FieldRule(FieldKind.IDENTIFIER, "Tenant", max_length=ID_MAX_LENGTH))

    assert out.valid
    assert out.value == raw.strip()


def test_identifier_too_long():
    out = validate("tenant_id", "T" * (ID_MAX_LENGTH + 1), FieldRule(FieldKind.IDENTIFIER, "Tenant", max_length=ID_MAX_LENGTH))

    assert out.code == ViolationCode.TOO_LONG


def test_custom_pattern_message():
    rule = FieldRule(FieldKind.TEXT, "Zip", pattern=r"^\d{5}$", pattern_message="Zip must be 5 digits")

    out = validate("zip", "12ab5", rule)

    assert out.message == "Zip must be 5 digits"


def test_non_text_input_is_invalid_type():
    out = validate("signer_name", 42, FieldRule(FieldKind.TEXT, "Signature"))

    assert out.code == ViolationCode.INVALID_TYPE


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2025-02-01", date(2025, 2, 1)),
        (date(2025, 2, 1), date(2025, 2, 1)),
        (datetime(2025, 2, 1, 23, 59), date(2025, 2, 1)),
    ],
)
def test_date_accepted_shapes(raw, expected):
    out = validate("d", raw, FieldRule(FieldKind.DATE, "Date"))

    assert out.value == expected


@pytest.mark.parametrize("raw", ["02/01/2025", "2025-02-30", 20250201])
def test_date_invalid(raw):
    out = validate("d", raw, FieldRule(FieldKind.DATE, "Date", required=True))

    assert out.code == ViolationCode.INVALID_DATE


def test_amount_empty_string_is_absent_not_zero():
    out = validate("amount_owed", "", FieldRule(FieldKind.AMOUNT, "Amount"))

    assert out.valid
    assert out.value is None


def test_amount_quantized_to_cents():
    out = validate("amount_owed", "12.345", FieldRule(FieldKind.AMOUNT, "Amount"))

    assert out.value == D("12.35")


def test_amount_explicit_zero_is_kept():
    out = validate("amount_owed", 0, FieldRule(FieldKind.AMOUNT, "Amount"))

    assert out.value == D("0.00")


@pytest.mark.parametrize("raw", [True, "abc", "nan", float("inf"), [1]])
def test_amount_invalid(raw):
    out = validate("amount_owed", raw, FieldRule(FieldKind.AMOUNT, "Amount"))

    assert out.code == ViolationCode.INVALID_NUMBER


def test_amount_bounds():
    rule = FieldRule(FieldKind.AMOUNT, "Amount", min_value=D("0"), max_value=D("100"))

    assert validate("a", "-1", rule).code == ViolationCode.BELOW_MINIMUM
    assert validate("a", "100.01", rule).code == ViolationCode.ABOVE_MAXIMUM


@pytest.mark.parametrize("raw,expected", [(True, True), ("yes", True), ("FALSE", False), ("0", False)])
def test_flag_values(raw, expected):
    assert validate("f", raw, FieldRule(FieldKind.FLAG, "Flag")).value is expected


def test_flag_invalid():
    assert validate("f", 5, FieldRule(FieldKind.FLAG, "Flag")).code == ViolationCode.INVALID_TYPE


def test_equals_field_mismatch():
    rule = FieldRule(FieldKind.TEXT, "Confirm password", equals_field="password")

    out = validate("confirm", "abc", rule, record={"password": "abd"})

    assert out.code == ViolationCode.MISMATCH
    assert validate("confirm", "abc", rule, record={"password": " abc "}).valid


def test_validate_record_accumulates():
    rules = {
        "a": FieldRule(FieldKind.TEXT, "A", required=True),
        "b": FieldRule(FieldKind.DATE, "B", required=True),
    }

    values, violations = validate_record({"b": "nope"}, rules)

    assert [v.field for v in violations] == ["a", "b"]
    assert all(v.kind == ViolationKind.FIELD for v in violations)


def test_validate_record_skip_when_flag_set():
    rules = {
        "waiver": FieldRule(FieldKind.FLAG, "Waiver", default=False),
        "amount": FieldRule(FieldKind.AMOUNT, "Amount", skip_when="waiver"),
    }

    values, violations = validate_record({"waiver": True, "amount": "garbage"}, rules)

    assert violations == []
    assert values == {"waiver": True, "amount": None}

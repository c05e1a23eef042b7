"""
Field validators - atomic rules for primitive submission values.

validate(field_name, raw_value, rule) never raises: any input shape yields a
FieldOutcome that is either valid (carrying the normalised value) or invalid
(carrying a ViolationCode and a message keyed to the field).

Numeric fields treat "" and None as absent, never as zero.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Final, List, Mapping, Optional, Tuple

from evictiontracker.intake.constants import (
    FLAG_FALSE_STRINGS,
    FLAG_TRUE_STRINGS,
    MONEY_QUANT,
)
from evictiontracker.intake.domain.violations import (
    Violation,
    ViolationCode,
    ViolationKind,
)

D = Decimal

ISO_DATE_RE: Final = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FieldKind(str, Enum):
    TEXT = "text"
    IDENTIFIER = "identifier"  # opaque catalog key, matched verbatim after trimming
    REFERENCE = "reference"  # opaque document name / storage key
    DATE = "date"
    AMOUNT = "amount"
    FLAG = "flag"


@dataclass(frozen=True)
class FieldRule:
    kind: FieldKind
    label: str
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_value: Optional[D] = None
    max_value: Optional[D] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = None
    equals_field: Optional[str] = None
    default: Any = None
    # name of a FLAG field; when that flag is set this field is not evaluated
    skip_when: Optional[str] = None


@dataclass(frozen=True)
class FieldOutcome:
    field: str
    valid: bool
    value: Any = None
    code: Optional[ViolationCode] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, field: str, value: Any) -> "FieldOutcome":
        return cls(field=field, valid=True, value=value)

    @classmethod
    def invalid(cls, field: str, code: ViolationCode, message: str) -> "FieldOutcome":
        return cls(field=field, valid=False, code=code, message=message)

    def to_violation(self) -> Violation:
        if self.valid or self.code is None:
            raise ValueError(f"outcome for '{self.field}' is valid")
        return Violation(
            kind=ViolationKind.FIELD,
            code=self.code,
            message=str(self.message),
            field=self.field,
        )


class _Reject(Exception):
    def __init__(self, code: ViolationCode, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


# =============================================================================
# Coercion per kind: return normalised value, None for "absent"
# =============================================================================


def _coerce_text(raw: Any, rule: FieldRule) -> Optional[str]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise _Reject(ViolationCode.INVALID_TYPE, f"{rule.label} must be text")
    text = raw.strip()
    return text or None


def _coerce_date(raw: Any, rule: FieldRule) -> Optional[date]:
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise _Reject(ViolationCode.INVALID_DATE, f"{rule.label} must be a valid date")
    text = raw.strip()
    if not text:
        return None
    if not ISO_DATE_RE.match(text):
        raise _Reject(
            ViolationCode.INVALID_DATE, f"{rule.label} must be a date in YYYY-MM-DD format"
        )
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise _Reject(ViolationCode.INVALID_DATE, f"{rule.label} is not a valid calendar date")


def _coerce_amount(raw: Any, rule: FieldRule) -> Optional[D]:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise _Reject(ViolationCode.INVALID_NUMBER, f"{rule.label} must be a number")
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    elif not isinstance(raw, (int, float, D)):
        raise _Reject(ViolationCode.INVALID_NUMBER, f"{rule.label} must be a number")
    try:
        amount = D(str(raw))
        if not amount.is_finite():
            raise InvalidOperation
        return amount.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise _Reject(ViolationCode.INVALID_NUMBER, f"{rule.label} must be a number")


def _coerce_flag(raw: Any, rule: FieldRule) -> Optional[bool]:
    if raw is None:
        return None
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        text = raw.strip().lower()
        if not text:
            return None
        if text in FLAG_TRUE_STRINGS:
            return True
        if text in FLAG_FALSE_STRINGS:
            return False
    raise _Reject(ViolationCode.INVALID_TYPE, f"{rule.label} must be true or false")


_COERCERS = {
    FieldKind.TEXT: _coerce_text,
    FieldKind.IDENTIFIER: _coerce_text,
    FieldKind.REFERENCE: _coerce_text,
    FieldKind.DATE: _coerce_date,
    FieldKind.AMOUNT: _coerce_amount,
    FieldKind.FLAG: _coerce_flag,
}


# =============================================================================
# Checks on a present value
# =============================================================================


def _check_length(value: str, rule: FieldRule) -> None:
    if rule.min_length is not None and len(value) < rule.min_length:
        raise _Reject(
            ViolationCode.TOO_SHORT,
            f"{rule.label} must be at least {rule.min_length} characters",
        )
    if rule.max_length is not None and len(value) > rule.max_length:
        raise _Reject(
            ViolationCode.TOO_LONG,
            f"{rule.label} must be no more than {rule.max_length} characters",
        )


def _check_bounds(value: D, rule: FieldRule) -> None:
    if rule.min_value is not None and value < rule.min_value:
        raise _Reject(
            ViolationCode.BELOW_MINIMUM, f"{rule.label} must be at least {rule.min_value}"
        )
    if rule.max_value is not None and value > rule.max_value:
        raise _Reject(
            ViolationCode.ABOVE_MAXIMUM,
            f"{rule.label} must be no more than {rule.max_value}",
        )


def _check_pattern(value: str, rule: FieldRule) -> None:
    if rule.pattern and not re.match(rule.pattern, value):
        raise _Reject(
            ViolationCode.PATTERN_MISMATCH,
            rule.pattern_message or f"{rule.label} has an invalid format",
        )


def validate(
    field_name: str,
    raw_value: Any,
    rule: FieldRule,
    *,
    record: Optional[Mapping[str, Any]] = None,
) -> FieldOutcome:
    """
    Validate and normalise one raw value.

    `record` is only consulted for cross-field equality (equals_field).
    """
    try:
        value = _COERCERS[rule.kind](raw_value, rule)

        if value is None:
            if rule.required:
                raise _Reject(ViolationCode.REQUIRED, f"{rule.label} is required")
            return FieldOutcome.ok(field_name, rule.default)

        if isinstance(value, str):
            _check_length(value, rule)
            _check_pattern(value, rule)
        elif isinstance(value, D):
            _check_bounds(value, rule)

        if rule.equals_field is not None:
            other = (record or {}).get(rule.equals_field)
            if isinstance(other, str):
                other = other.strip()
            if value != other:
                raise _Reject(ViolationCode.MISMATCH, f"{rule.label} doesn't match")

    except _Reject as r:
        return FieldOutcome.invalid(field_name, r.code, r.message)

    return FieldOutcome.ok(field_name, value)


def validate_record(
    record: Mapping[str, Any], rules: Mapping[str, FieldRule]
) -> Tuple[Dict[str, Any], List[Violation]]:
    """
    Conjunction of field validators over one record.

    Every field is evaluated (violations accumulate). Fields whose `skip_when`
    flag is set are not evaluated and normalise to their default.
    """
    values: Dict[str, Any] = {}
    violations: List[Violation] = []

    for name, rule in rules.items():
        if rule.skip_when is not None and values.get(rule.skip_when) is True:
            values[name] = rule.default
            continue

        outcome = validate(name, record.get(name), rule, record=record)
        if outcome.valid:
            values[name] = outcome.value
        else:
            violations.append(outcome.to_violation())

    return values, violations

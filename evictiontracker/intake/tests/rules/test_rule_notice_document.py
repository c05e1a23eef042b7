from dataclasses import replace

import pytest

from evictiontracker.intake.constants import DEFAULT_SUBSIDY_TYPE
from evictiontracker.intake.domain.models import PropertyType
from evictiontracker.intake.domain.violations import ViolationCode
from evictiontracker.intake.rule_types.base import RejectIntake
from evictiontracker.intake.rule_types.notice_document import NoticeDocumentRule


def _rule():
    return NoticeDocumentRule(
        rule_id="notice_document",
        title="Notice",
        params={
            "default_subsidy_type": DEFAULT_SUBSIDY_TYPE,
            "property_types": ["Residential"],
        },
    )


def test_notice_not_subsidized_skipped(ctx):
    out = _rule().apply(ctx)

    assert out.decision == "SKIPPED"
    assert ctx.state.document_required is False


def test_notice_default_subsidy_not_required(ctx):
    ctx.tenant = replace(ctx.tenant, is_subsidized=True, subsidy_type=DEFAULT_SUBSIDY_TYPE)

    assert _rule().apply(ctx).decision == "SKIPPED"
    assert ctx.state.document_required is False


def test_notice_required_and_missing_rejects(ctx):
    ctx.tenant = replace(ctx.tenant, is_subsidized=True, subsidy_type="Section8")

    with pytest.raises(RejectIntake) as e:
        _rule().apply(ctx)

    assert e.value.code == ViolationCode.DOCUMENT_REQUIRED
    assert e.value.field == "notice_document"
    assert ctx.state.document_required is True


def test_notice_required_and_supplied_applies(ctx):
    ctx.tenant = replace(ctx.tenant, is_subsidized=True, subsidy_type="Section8")
    ctx.submission = replace(ctx.submission, notice_document="notice-30day.pdf")

    out = _rule().apply(ctx)

    assert out.decision == "APPLIED"
    assert out.meta["document"] == "notice-30day.pdf"


def test_notice_commercial_property_not_required(ctx):
    ctx.tenant = replace(ctx.tenant, is_subsidized=True, subsidy_type="Section8")
    ctx.prop = replace(ctx.prop, property_type=PropertyType.COMMERCIAL)

    assert _rule().apply(ctx).decision == "SKIPPED"

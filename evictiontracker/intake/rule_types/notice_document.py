from __future__ import annotations

from ..calculators.eligibility import notice_document_required
from ..constants import DEFAULT_SUBSIDY_TYPE
from ..domain.models import PropertyType
from ..domain.violations import ViolationCode
from .base import RejectIntake, Rule, RuleResult, Stage, register


@register
class NoticeDocumentRule(Rule):
    """
    30-day notice upload, required for residential subsidized tenancies whose
    subsidy type is not the default program.
    params:
      default_subsidy_type: "Housing Choice Voucher Program (Section 8)"
      property_types: ["Residential"]
    """

    type_name = "notice_document"
    stage = Stage.ELIGIBILITY

    def apply(self, ctx) -> RuleResult:
        default_type = str(self.params.get("default_subsidy_type", DEFAULT_SUBSIDY_TYPE))
        types = [
            pt
            for pt in (
                PropertyType.from_string(v)
                for v in self.params.get("property_types", [PropertyType.RESIDENTIAL.value])
            )
            if pt is not None
        ]

        required = notice_document_required(
            ctx.prop,
            ctx.tenant,
            default_subsidy_type=default_type,
            property_types=types,
        )
        ctx.state.document_required = required

        if not required:
            return RuleResult.skipped({"required": False})

        if not ctx.submission.notice_document:
            raise RejectIntake(
                ViolationCode.DOCUMENT_REQUIRED,
                "A 30-day notice upload is required for this subsidy type.",
                field="notice_document",
                meta={"subsidyType": ctx.tenant.subsidy_type},
            )

        return RuleResult.applied(
            {"required": True, "document": ctx.submission.notice_document}
        )

from __future__ import annotations

from ..calculators.eligibility import find_open_request
from ..domain.violations import ViolationCode
from .base import RejectIntake, Rule, RuleResult, Stage, register


@register
class DuplicateRequestRule(Rule):
    """
    One unpaid, in-flight request per tenant. Drafts and completed cases
    do not block a new request.
    """

    type_name = "duplicate_request"
    stage = Stage.ELIGIBILITY

    def apply(self, ctx) -> RuleResult:
        tenant_id = ctx.tenant.tenant_id
        existing = find_open_request(ctx.ledger.cases, tenant_id)

        if existing is not None:
            raise RejectIntake(
                ViolationCode.DUPLICATE_REQUEST,
                "An active or unpaid eviction letter request already exists for this tenant. "
                "Please complete payment or wait for the existing request to be resolved.",
                meta={
                    "caseId": existing.case_id,
                    "status": existing.status,
                    "paymentStatus": existing.payment_status,
                },
            )

        return RuleResult.applied({"tenantId": tenant_id})

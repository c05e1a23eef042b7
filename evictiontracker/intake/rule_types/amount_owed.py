from __future__ import annotations

from ..domain.violations import ViolationCode
from .base import RejectIntake, Rule, RuleResult, Stage, register


@register
class AmountOwedRule(Rule):
    """
    Amount owed is required and > 0 unless the tenant has no right of
    redemption; with the waiver set the amount is ignored (forced to 0 in the draft).
    """

    type_name = "amount_owed"
    stage = Stage.CROSS_FIELD

    def apply(self, ctx) -> RuleResult:
        sub = ctx.submission

        if sub.no_right_of_redemption:
            return RuleResult.skipped({"waiver": True})

        if sub.amount_owed is None or sub.amount_owed <= 0:
            raise RejectIntake(
                ViolationCode.AMOUNT_REQUIRED,
                "Amount Due to Redeem the Property is required when tenant can pay to stay",
                field="amount_owed",
            )

        return RuleResult.applied({"amountOwed": str(sub.amount_owed)})

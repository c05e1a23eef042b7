from __future__ import annotations

from ..calculators.eligibility import months_owed
from ..constants import REDEMPTION_CAP_MONTHS
from ..domain.violations import ViolationCode
from .base import RejectIntake, Rule, RuleResult, Stage, register


@register
class RedemptionCapRule(Rule):
    """
    Subsidized tenancies: at most `max_months` of rent may be claimed.
    Only evaluated with waiver off, an amount present and a positive monthly rent.
    params:
      max_months: 12
    """

    type_name = "redemption_cap"
    stage = Stage.ELIGIBILITY

    def apply(self, ctx) -> RuleResult:
        max_months = int(self.params.get("max_months", REDEMPTION_CAP_MONTHS))
        sub = ctx.submission
        tenant = ctx.tenant

        if not tenant.is_subsidized or sub.no_right_of_redemption or not sub.amount_owed:
            return RuleResult.skipped({"subsidized": tenant.is_subsidized})

        months = months_owed(sub.amount_owed, tenant.rent_amount)
        if months is None:
            return RuleResult.skipped({"reason": "no_monthly_rent"})

        meta = {"monthsOwed": months, "maxMonths": max_months}
        if months > max_months:
            raise RejectIntake(
                ViolationCode.REDEMPTION_CAP_EXCEEDED,
                f"For subsidized tenancies, you can only claim up to {max_months} months of rent.",
                field="amount_owed",
                meta=meta,
            )

        return RuleResult.applied(meta)

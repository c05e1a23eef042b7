from __future__ import annotations

from ..calculators.lead_time import whole_days_until
from ..constants import MIN_EVICTION_LEAD_DAYS
from ..domain.violations import ViolationCode
from .base import RejectIntake, Rule, RuleResult, Stage, register


@register
class EvictionLeadTimeRule(Rule):
    """
    Scheduled eviction must be at least `min_days` whole days after today.
    params:
      min_days: 17
    """

    type_name = "eviction_lead_time"
    stage = Stage.CROSS_FIELD

    def apply(self, ctx) -> RuleResult:
        min_days = int(self.params.get("min_days", MIN_EVICTION_LEAD_DAYS))
        target = ctx.submission.scheduled_eviction_date

        days = whole_days_until(ctx.today, target, ctx.tz)
        meta = {"days": days, "minDays": min_days, "today": ctx.today.isoformat()}

        if days < min_days:
            raise RejectIntake(
                ViolationCode.EVICTION_DATE_TOO_SOON,
                f"Initial Scheduled Date of Eviction must be at least {min_days} days from today",
                field="scheduled_eviction_date",
                meta=meta,
            )

        return RuleResult.applied(meta)

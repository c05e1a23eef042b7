# Ensure registration happens by importing modules
from .base import Rule, RuleResult, RejectIntake, Stage, rule_registry  # noqa
from . import (  # noqa
    amount_owed,
    eviction_lead_time,
    region_price,
    duplicate_request,
    redemption_cap,
    notice_document,
)

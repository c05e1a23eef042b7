from __future__ import annotations

import time
from functools import lru_cache

from fastapi import APIRouter, Request

from evictiontracker.core.logging_config import logger
from evictiontracker.intake.engine.intake_engine import IntakeEngine
from evictiontracker.intake.rule_types.base import STAGE_ORDER
from evictiontracker.intake.schemas.intake_input_v1 import IntakeEvaluateInputV1
from evictiontracker.intake.schemas.intake_output_v1 import (
    IntakeDecisionOutputV1,
    RuleSetOutputV1,
    RuleSummaryV1,
)

router = APIRouter(prefix="/api/ftpr/intake", tags=["ftpr", "intake"])


@lru_cache
def get_engine() -> IntakeEngine:
    return IntakeEngine.default()


# ----------------------------
# Helpers
# ----------------------------
def _log_obs(
    *,
    request: Request,
    endpoint: str,
    payload: IntakeEvaluateInputV1,
    duration_ms: float,
    result: str,
    event: str,
    violation_codes: list[str] | None = None,
    status_code: int | None = None,
):
    request_id = getattr(request.state, "request_id", None) or request.headers.get(
        "X-Request-ID", "unknown"
    )

    bound = logger.bind(
        request_id=request_id,
        landlord_id=payload.account.landlord_id if payload.account else None,
        duration_ms=duration_ms,
        result=result,
        endpoint=endpoint,
    )
    if violation_codes:
        bound = bound.bind(violation_codes=violation_codes)
    if status_code is not None:
        bound = bound.bind(status_code=status_code)

    bound.info(event)


# ----------------------------
# Evaluate
# ----------------------------
@router.post("/evaluate", response_model=IntakeDecisionOutputV1)
def evaluate_intake(
    payload: IntakeEvaluateInputV1, request: Request
) -> IntakeDecisionOutputV1:
    t0 = time.time()

    engine = get_engine()
    decision = engine.decide(
        payload.raw_submission(),
        payload.account.to_domain() if payload.account else None,
        payload.catalog(),
        payload.ledger(),
        now=payload.now,
    )
    out = IntakeDecisionOutputV1.from_decision(decision)
    duration_ms = round((time.time() - t0) * 1000, 2)

    _log_obs(
        request=request,
        endpoint="/api/ftpr/intake/evaluate",
        payload=payload,
        duration_ms=duration_ms,
        result=out.status,
        event="intake_evaluate",
        violation_codes=list(decision.violation_codes),
        status_code=200,
    )
    return out


# ----------------------------
# Active ruleset
# ----------------------------
@router.get("/ruleset", response_model=RuleSetOutputV1)
def active_ruleset() -> RuleSetOutputV1:
    engine = get_engine()

    rules = [
        RuleSummaryV1(
            id=spec.id,
            type=spec.type,
            title=spec.title,
            stage=stage.value,
            enabled=spec.enabled,
            params=dict(spec.params or {}),
        )
        for stage in STAGE_ORDER
        for spec, _ in engine.runner.rules_for(stage)
    ]
    return RuleSetOutputV1(
        ruleset_version=engine.ruleset.rule_set_version,
        rules=rules,
    )

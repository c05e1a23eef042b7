from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo

from evictiontracker.core.contracts import Catalog

from .context import (
    CaseDraft,
    DecisionStatus,
    IntakeContext,
    IntakeDecision,
    RuleTraceLineV1,
)
from ..domain.models import Account, CaseLedger
from ..domain.violations import Violation, ViolationCode, ViolationKind
from ..rule_types.base import (
    DECISION_REJECTED,
    STAGE_ORDER,
    RejectIntake,
    Rule,
    RuleResult,
    Stage,
    rule_registry,
)
from ..validators.submission import submitted_tenant_id, validate_submission

D = Decimal


# -----------------------
# Ruleset models
# -----------------------


def _duplicates(ids: List[str]) -> List[str]:
    seen, dups = set(), []
    for rid in ids:
        if rid in seen and rid not in dups:
            dups.append(rid)
        seen.add(rid)
    return dups


@dataclass(frozen=True)
class RuleSpec:
    id: str
    type: str
    title: str
    enabled: bool = True
    params: Dict[str, Any] | None = None

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "RuleSpec":
        return RuleSpec(
            id=str(d["id"]),
            type=str(d["type"]),
            title=str(d.get("title") or d["id"]),
            enabled=bool(d.get("enabled", True)),
            params=dict(d.get("params") or {}),
        )


@dataclass(frozen=True)
class RuleSet:
    rule_set_version: str
    execution_order: List[str]
    rules: List[RuleSpec]

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "RuleSet":
        rules = [RuleSpec.from_dict(x) for x in d.get("rules", [])]
        execution_order = [str(x) for x in (d.get("executionOrder") or [])]
        rule_set_version = str(d.get("ruleSetVersion") or d.get("version") or "v1")

        # Cross-validation
        ids = [r.id for r in rules]

        dups = _duplicates(ids)
        if dups:
            raise ValueError(f"Duplicate rule ids in ruleset: {dups}")

        dups = _duplicates(execution_order)
        if dups:
            raise ValueError(f"Duplicate rule ids in executionOrder: {dups}")

        missing = sorted(set(execution_order) - set(ids))
        if missing:
            raise ValueError(f"executionOrder references unknown rule ids: {missing}")

        unlisted = sorted(set(ids) - set(execution_order))
        if unlisted:
            raise ValueError(f"Rules not listed in executionOrder: {unlisted}")

        if not execution_order:
            raise ValueError("executionOrder must contain at least one rule id.")

        unknown = sorted({r.type for r in rules if r.type not in rule_registry})
        if unknown:
            raise ValueError(f"Unknown rule types in ruleset: {unknown}")

        return RuleSet(
            rule_set_version=rule_set_version,
            execution_order=execution_order,
            rules=rules,
        )


# -----------------------
# Runner
# -----------------------


class RuleRunner:
    """
    Deterministic, staged intake decision.

    Sequence:
    1. account check (no account -> single CONTEXT violation)
    2. field validators (accumulate, stop if any; pricing still reported)
    3. cross_field rules (accumulate, stop if any; pricing still reported)
    4. tenant/property lookup (CONTEXT violation, stop)
    5. pricing rules (stop at first), then price must be > 0
    6. eligibility rules (stop at first)
    7. draft assembly

    Stages follow STAGE_ORDER; executionOrder only orders rules within a stage.
    Rules are instantiated once here and must not keep per-call state.
    """

    def __init__(self, ruleset: RuleSet):
        self.ruleset = ruleset

        specs: Dict[str, RuleSpec] = {r.id: r for r in ruleset.rules}
        self._stages: Dict[Stage, List[Tuple[RuleSpec, Rule]]] = {
            s: [] for s in STAGE_ORDER
        }
        for rule_id in ruleset.execution_order:
            spec = specs[rule_id]
            rule_cls = rule_registry.get(spec.type)
            if rule_cls is None:
                raise ValueError(f"Unknown rule type: {spec.type}")
            rule = rule_cls(rule_id=spec.id, title=spec.title, params=spec.params or {})
            self._stages[rule_cls.stage].append((spec, rule))

    def rules_for(self, stage: Stage) -> List[Tuple[RuleSpec, Rule]]:
        return list(self._stages[stage])

    # -----------------
    # stages
    # -----------------

    def _run_stage(
        self,
        stage: Stage,
        ctx: IntakeContext,
        trace: List[RuleTraceLineV1],
    ) -> List[Violation]:
        violations: List[Violation] = []

        for spec, rule in self._stages[stage]:
            if not spec.enabled:
                trace.append(
                    self._line(spec, stage, RuleResult.skipped({"reason": "disabled"}))
                )
                continue

            try:
                result = rule.apply(ctx)
            except RejectIntake as r:
                violations.append(
                    Violation(
                        kind=stage.violation_kind,
                        code=r.code,
                        message=r.message,
                        field=r.field,
                    )
                )
                trace.append(
                    RuleTraceLineV1(
                        rule_id=spec.id,
                        rule_type=spec.type,
                        title=spec.title,
                        stage=stage.value,
                        decision=DECISION_REJECTED,
                        meta={"code": r.code.value, **r.meta},
                    )
                )
                if not stage.accumulates:
                    break
                continue

            trace.append(self._line(spec, stage, result))

        return violations

    @staticmethod
    def _line(spec: RuleSpec, stage: Stage, result: RuleResult) -> RuleTraceLineV1:
        return RuleTraceLineV1(
            rule_id=spec.id,
            rule_type=spec.type,
            title=spec.title,
            stage=stage.value,
            decision=result.decision,
            meta=dict(result.meta),
        )

    @staticmethod
    def _resolve_catalog(ctx: IntakeContext, catalog: Catalog) -> Optional[Violation]:
        sub = ctx.submission

        tenant = catalog.get_tenant(sub.tenant_id)
        if tenant is None:
            return Violation(
                kind=ViolationKind.CONTEXT,
                code=ViolationCode.TENANT_NOT_FOUND,
                message="Selected tenant could not be found",
                field="tenant_id",
            )

        if sub.property_id is not None and sub.property_id != tenant.property_id:
            return Violation(
                kind=ViolationKind.CONTEXT,
                code=ViolationCode.PROPERTY_MISMATCH,
                message="Selected property does not match the tenant's property",
                field="property_id",
            )

        prop = catalog.get_property(tenant.property_id)
        if prop is None:
            return Violation(
                kind=ViolationKind.CONTEXT,
                code=ViolationCode.PROPERTY_NOT_FOUND,
                message="Associated property for the selected tenant could not be found",
                field="property_id",
            )

        ctx.tenant = tenant
        ctx.prop = prop
        return None

    @staticmethod
    def _amount_guard(ctx: IntakeContext, found: List[Violation]) -> Optional[Violation]:
        """Waiver off requires a positive amount even if the amount rule is disabled."""
        sub = ctx.submission
        if sub.no_right_of_redemption:
            return None
        if sub.amount_owed is not None and sub.amount_owed > 0:
            return None
        if any(v.field == "amount_owed" for v in found):
            return None
        return Violation(
            kind=ViolationKind.CROSS_FIELD,
            code=ViolationCode.AMOUNT_REQUIRED,
            message="Amount Due to Redeem the Property is required when tenant can pay to stay",
            field="amount_owed",
        )

    def _rejected(
        self,
        violations: List[Violation],
        trace: List[RuleTraceLineV1],
    ) -> IntakeDecision:
        return IntakeDecision(
            status=DecisionStatus.REJECTED,
            ruleset_version=self.ruleset.rule_set_version,
            violations=tuple(violations),
            trace=tuple(trace),
        )

    @staticmethod
    def _draft(ctx: IntakeContext) -> CaseDraft:
        sub = ctx.submission
        waiver = sub.no_right_of_redemption
        required = ctx.state.document_required
        return CaseDraft(
            landlord_id=ctx.account.landlord_id,
            tenant_id=ctx.tenant.tenant_id,
            property_id=ctx.prop.property_id,
            date_initiated=ctx.today,
            amount_owed=D("0.00") if waiver else sub.amount_owed,
            price=ctx.state.price,
            no_right_of_redemption=waiver,
            court_case_number=sub.court_case_number,
            warrant_order_date=sub.warrant_order_date,
            scheduled_eviction_date=sub.scheduled_eviction_date,
            signer_name=sub.signer_name,
            document_required=required,
            notice_document=sub.notice_document if required else None,
        )

    @staticmethod
    def _price_not_positive() -> Violation:
        return Violation(
            kind=ViolationKind.PRICING,
            code=ViolationCode.PRICE_NOT_POSITIVE,
            message="Cannot submit with an invalid price.",
        )

    def _pricing_alongside(
        self,
        tenant_id: Optional[str],
        account: Account,
        catalog: Catalog,
        ledger: CaseLedger,
        today: date,
        tz: ZoneInfo,
        trace: List[RuleTraceLineV1],
    ) -> List[Violation]:
        """
        Pricing for a submission already rejected on its fields, so an unpriced
        or locked region is reported with them. Needs only the tenant; an
        unknown tenant or property adds nothing here.
        """
        if tenant_id is None:
            return []
        tenant = catalog.get_tenant(tenant_id)
        prop = catalog.get_property(tenant.property_id) if tenant is not None else None
        if prop is None:
            return []

        ctx = IntakeContext(
            submission=None,
            account=account,
            ledger=ledger,
            today=today,
            tz=tz,
            tenant=tenant,
            prop=prop,
        )
        violations = self._run_stage(Stage.PRICING, ctx, trace)
        if not violations and ctx.state.price <= 0:
            violations.append(self._price_not_positive())
        return violations

    # -----------------
    # entrypoint
    # -----------------

    def run(
        self,
        submission: Mapping[str, Any],
        account: Optional[Account],
        catalog: Catalog,
        ledger: CaseLedger,
        *,
        today: date,
        tz: ZoneInfo,
    ) -> IntakeDecision:
        trace: List[RuleTraceLineV1] = []

        if account is None:
            return self._rejected(
                [
                    Violation(
                        kind=ViolationKind.CONTEXT,
                        code=ViolationCode.UNAUTHENTICATED,
                        message="You must be logged in to submit a request.",
                    )
                ],
                trace,
            )

        validated, violations = validate_submission(submission)
        if validated is None:
            violations += self._pricing_alongside(
                submitted_tenant_id(submission), account, catalog, ledger, today, tz, trace
            )
            return self._rejected(violations, trace)

        ctx = IntakeContext(
            submission=validated,
            account=account,
            ledger=ledger,
            today=today,
            tz=tz,
        )

        violations = self._run_stage(Stage.CROSS_FIELD, ctx, trace)
        guard = self._amount_guard(ctx, violations)
        if guard is not None:
            violations.append(guard)
        if violations:
            violations += self._pricing_alongside(
                validated.tenant_id, account, catalog, ledger, today, tz, trace
            )
            return self._rejected(violations, trace)

        missing = self._resolve_catalog(ctx, catalog)
        if missing is not None:
            return self._rejected([missing], trace)

        violations = self._run_stage(Stage.PRICING, ctx, trace)
        if violations:
            return self._rejected(violations, trace)
        if ctx.state.price <= 0:
            return self._rejected([self._price_not_positive()], trace)

        violations = self._run_stage(Stage.ELIGIBILITY, ctx, trace)
        if violations:
            return self._rejected(violations, trace)

        return IntakeDecision(
            status=DecisionStatus.ADMITTED,
            ruleset_version=self.ruleset.rule_set_version,
            draft=self._draft(ctx),
            trace=tuple(trace),
        )

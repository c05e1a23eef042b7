from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from zoneinfo import ZoneInfo

import yaml
from jsonschema import validate

from evictiontracker.config import get_settings
from evictiontracker.core.contracts import Catalog
from evictiontracker.core.logging_config import logger

from .context import IntakeDecision
from .rule_runner import RuleRunner, RuleSet
from ..domain.models import Account, CaseLedger

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "rule_set.schema.json"


def load_rule_set_schema() -> Dict[str, Any]:
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)


class IntakeEngine:
    """
    Facade over one loaded ruleset.

    decide() is a pure function of its arguments: pass a fixed `now` in tests.
    """

    def __init__(self, ruleset_dict: Dict[str, Any], tz: ZoneInfo | str = "UTC"):
        self.ruleset = RuleSet.from_dict(ruleset_dict)
        self.runner = RuleRunner(self.ruleset)
        self.tz = tz if isinstance(tz, ZoneInfo) else ZoneInfo(str(tz))

    @classmethod
    def from_yaml_file(cls, path: str | Path, tz: ZoneInfo | str = "UTC") -> "IntakeEngine":
        ruleset_path = Path(path)

        with ruleset_path.open("r", encoding="utf-8") as f:
            d = yaml.safe_load(f) or {}

        validate(instance=d, schema=load_rule_set_schema())
        engine = cls(d, tz=tz)

        logger.info(
            "ruleset_loaded",
            path=str(ruleset_path),
            ruleset_version=engine.ruleset.rule_set_version,
            rule_count=len(engine.ruleset.rules),
        )
        return engine

    @classmethod
    def default(cls) -> "IntakeEngine":
        s = get_settings()
        return cls.from_yaml_file(s.intake_ruleset_path, tz=s.intake_timezone)

    def today(self, now: datetime) -> date:
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(self.tz).date()

    def decide(
        self,
        submission: Mapping[str, Any],
        account: Optional[Account],
        catalog: Catalog,
        ledger: Optional[CaseLedger] = None,
        *,
        now: Optional[datetime] = None,
    ) -> IntakeDecision:
        if now is None:
            now = datetime.now(timezone.utc)

        return self.runner.run(
            submission,
            account,
            catalog,
            ledger or CaseLedger(),
            today=self.today(now),
            tz=self.tz,
        )

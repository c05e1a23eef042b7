# evictiontracker/config.py
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RULESET_PATH = (
    Path(__file__).resolve().parent / "intake" / "rules" / "rule_sets" / "v1.yaml"
)


class Settings(BaseSettings):
    # === General ===
    app_env: str = "local"  # local | development | production

    # === Logging ===
    log_level: str = "INFO"

    # === Intake engine ===
    intake_timezone: str = Field(
        "America/New_York",
        description="Zone in which 'today' and midnight-aligned dates are computed",
    )
    intake_ruleset_path: str = Field(
        str(DEFAULT_RULESET_PATH), description="YAML ruleset used by the intake engine"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance with simple env overrides."""
    s = Settings()

    env = os.getenv("ENVIRONMENT", s.app_env).lower()
    if env == "production":
        s.log_level = "WARNING"
    elif env == "development":
        s.log_level = "DEBUG"

    return s


settings = get_settings()

# src/israstat/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # -----------------------------
    # Calculator defaults (what the form starts with)
    # -----------------------------
    DEFAULT_INITIAL_CAPITAL: float = Field(default=800_000.0)
    DEFAULT_MONTHLY_GROSS_INCOME: float = Field(default=25_000.0)
    DEFAULT_BUYER_TYPE: str = Field(default="FIRST_HOME")
    DEFAULT_DSR: float = Field(default=0.30)
    DEFAULT_INTEREST_RATE: float = Field(default=0.051)
    DEFAULT_TERM_YEARS: int = Field(default=25)

    # -----------------------------
    # Deal explorer
    # -----------------------------
    DEFAULT_DEAL_COUNT: int = Field(default=40)
    MAX_DEAL_COUNT: int = Field(default=500)

    # Neighborhoods up to 15% over budget still show as opportunities
    BUDGET_TOLERANCE: float = Field(default=1.15)

    TREND_WINDOW: int = Field(default=5)

    model_config = SettingsConfigDict(
        env_prefix="ISRASTAT_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "DEFAULT_DSR",
        "DEFAULT_INTEREST_RATE",
        mode="before",
    )
    @classmethod
    def _to_non_negative_fraction(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("rate must be numeric or percent-like") from err
        if f > 1.0:
            f = f / 100.0
        if f < 0:
            raise ValueError("rate must be non-negative")
        return f

    @field_validator("BUDGET_TOLERANCE", mode="before")
    @classmethod
    def _tolerance_positive(cls, v: Any) -> Any:
        f = float(v)
        if f <= 0:
            raise ValueError("BUDGET_TOLERANCE must be > 0")
        return f

    @field_validator("DEFAULT_DEAL_COUNT", "MAX_DEAL_COUNT", "TREND_WINDOW", mode="before")
    @classmethod
    def _count_positive(cls, v: Any) -> Any:
        n = int(v)
        if n < 1:
            raise ValueError("counts and windows must be >= 1")
        return n


config = AppConfig()

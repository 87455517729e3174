# src/israstat/services/validation.py

import math
from typing import Any

from israstat.adapters.config import config
from israstat.adapters.logging_utils import get_logger
from israstat.domain.deals import MOST_CONSERVATIVE_TREND, TRENDS
from israstat.domain.mortgage import BUYER_TYPES, MOST_CONSERVATIVE_BUYER, MortgageInputs

logger = get_logger(__name__)

# Domains the calculator's sliders enforce
DSR_MIN, DSR_MAX = 0.20, 0.40
TERM_MIN_YEARS, TERM_MAX_YEARS = 10, 30

# Loose spellings people actually send for buyer type
_BUYER_ALIASES = {
    "FIRST": "FIRST_HOME",
    "FIRSTHOME": "FIRST_HOME",
    "UPGRADER": "MOVER",
}


class InvalidInputError(ValueError):
    """A caller-supplied value is outside the documented domain."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


def _to_num(val: Any, field_name: str) -> float:
    """
    Coerce values like:
      - 800000
      - "800000"
      - "800,000"
      - "5.1"
      - "5.1%"
    into float. Percent handling is left to the caller.
    """
    if val is None:
        raise InvalidInputError(field_name, "missing required numeric field")
    if isinstance(val, bool):
        raise InvalidInputError(field_name, "expected a number, got a boolean")
    if isinstance(val, (int, float)):
        f = float(val)
    elif isinstance(val, str):
        s = val.strip().replace(",", "").replace("_", "")
        if s.endswith("%"):
            s = s[:-1]
        try:
            f = float(s)
        except ValueError:
            raise InvalidInputError(field_name, f"not a number: {val!r}") from None
    else:
        raise InvalidInputError(field_name, f"invalid type {type(val).__name__}")

    # float() happily parses "nan" and "inf"
    if not math.isfinite(f):
        raise InvalidInputError(field_name, "must be a finite number")
    return f


def _to_fraction(val: Any, field_name: str) -> float:
    """
    Rates and ratios: "30%", "30" and 0.30 all mean 0.30.
    Anything above 1 is read as a percentage.
    """
    f = _to_num(val, field_name)
    if isinstance(val, str) and val.strip().endswith("%"):
        return f / 100.0
    if f > 1.0:
        return f / 100.0
    return f


def normalize_buyer_type(raw: Any) -> str:
    """
    Case/space/dash-insensitive buyer type. Unknown values fall back to the
    most conservative category (lowest LTV) with a warning.
    """
    key = str(raw or "").strip().upper().replace("-", "_").replace(" ", "_")
    key = _BUYER_ALIASES.get(key.replace("_", ""), key)
    if key in BUYER_TYPES:
        return key
    logger.warning(
        "unknown buyer_type, using most conservative",
        extra={"context": {"buyer_type": raw, "fallback": MOST_CONSERVATIVE_BUYER}},
    )
    return MOST_CONSERVATIVE_BUYER


def normalize_trend(raw: Any) -> str:
    key = str(raw or "").strip().lower()
    if key in TRENDS:
        return key
    logger.warning(
        "unknown trend, using most conservative",
        extra={"context": {"trend": raw, "fallback": MOST_CONSERVATIVE_TREND}},
    )
    return MOST_CONSERVATIVE_TREND


def prepare_mortgage_inputs(raw: dict[str, Any]) -> MortgageInputs:
    """
    Normalize an incoming calculator payload into MortgageInputs.

    Responsibilities:
      - Fill omitted fields from the configured calculator defaults.
      - Coerce numeric / percent-like strings.
      - Enforce the calculator domains, raising InvalidInputError that
        names the offending field.
    """
    def pick(field: str, default: Any) -> Any:
        val = raw.get(field)
        if val is None or (isinstance(val, str) and not val.strip()):
            return default
        return val

    capital = _to_num(pick("initial_capital", config.DEFAULT_INITIAL_CAPITAL), "initial_capital")
    if capital <= 0:
        raise InvalidInputError("initial_capital", "must be > 0")

    income = _to_num(pick("monthly_gross_income", config.DEFAULT_MONTHLY_GROSS_INCOME), "monthly_gross_income")
    if income <= 0:
        raise InvalidInputError("monthly_gross_income", "must be > 0")

    dsr = _to_fraction(pick("dsr", config.DEFAULT_DSR), "dsr")
    # tolerate float noise like 0.30000000000000004 at the edges
    if not (DSR_MIN - 1e-9 <= dsr <= DSR_MAX + 1e-9):
        raise InvalidInputError("dsr", f"must be between {DSR_MIN:.2f} and {DSR_MAX:.2f}, got {dsr:.4f}")

    rate = _to_fraction(pick("interest_rate", config.DEFAULT_INTEREST_RATE), "interest_rate")
    if not (0.0 < rate < 1.0):
        raise InvalidInputError("interest_rate", f"must be in (0, 1), got {rate:.4f}")

    term = _to_num(pick("term_years", config.DEFAULT_TERM_YEARS), "term_years")
    if term != int(term):
        raise InvalidInputError("term_years", "must be a whole number of years")
    term_years = int(term)
    if not (TERM_MIN_YEARS <= term_years <= TERM_MAX_YEARS):
        raise InvalidInputError("term_years", f"must be between {TERM_MIN_YEARS} and {TERM_MAX_YEARS}")

    buyer_type = normalize_buyer_type(pick("buyer_type", config.DEFAULT_BUYER_TYPE))

    return MortgageInputs(
        initial_capital=capital,
        monthly_gross_income=income,
        buyer_type=buyer_type,  # type: ignore[arg-type]
        dsr=dsr,
        interest_rate=rate,
        term_years=term_years,
    )


def prepare_deal_count(raw: Any) -> int:
    if raw is None:
        return config.DEFAULT_DEAL_COUNT
    n = _to_num(raw, "count")
    if n != int(n):
        raise InvalidInputError("count", "must be a whole number")
    count = int(n)
    if not (1 <= count <= config.MAX_DEAL_COUNT):
        raise InvalidInputError("count", f"must be between 1 and {config.MAX_DEAL_COUNT}")
    return count


def prepare_deal_request(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Validate an ad-hoc deal generation request.

    Returns kwargs for generate_deals().
    """
    name = str(raw.get("neighborhood_name") or "").strip()
    if not name:
        raise InvalidInputError("neighborhood_name", "missing required field")
    city = str(raw.get("city") or "").strip()
    if not city:
        raise InvalidInputError("city", "missing required field")

    avg = _to_num(raw.get("avg_price_per_sqm"), "avg_price_per_sqm")
    if avg <= 0:
        raise InvalidInputError("avg_price_per_sqm", "must be > 0")

    return {
        "neighborhood_name": name,
        "city": city,
        "avg_price_per_sqm": avg,
        "trend": normalize_trend(raw.get("trend")),
        "count": prepare_deal_count(raw.get("count")),
    }

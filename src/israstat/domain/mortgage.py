# src/israstat/domain/mortgage.py
from dataclasses import dataclass
from typing import Dict, Literal, get_args

# Buyer categories recognised by the Bank of Israel LTV directive
BuyerType = Literal["FIRST_HOME", "MOVER", "INVESTOR"]

BUYER_TYPES: tuple[str, ...] = get_args(BuyerType)

# Used when a caller hands us something we don't recognise: lowest LTV wins.
MOST_CONSERVATIVE_BUYER: BuyerType = "INVESTOR"

# Bank of Israel LTV ceilings by buyer type
LTV_LIMITS: Dict[str, float] = {
    "FIRST_HOME": 0.75,
    "MOVER": 0.70,
    "INVESTOR": 0.50,
}

BUYER_LABELS: Dict[str, str] = {
    "FIRST_HOME": "1st Home",
    "MOVER": "Upgrader",
    "INVESTOR": "Investor",
}

BUYER_DESCRIPTIONS: Dict[str, str] = {
    "FIRST_HOME": "First-time buyer, up to 75% financing",
    "MOVER": "Selling existing property, up to 70% financing",
    "INVESTOR": "Investment property, up to 50% financing",
}

for _table in (LTV_LIMITS, BUYER_LABELS, BUYER_DESCRIPTIONS):
    if set(_table) != set(BUYER_TYPES):
        raise RuntimeError("buyer tables must cover every BuyerType")


@dataclass(frozen=True)
class MortgageInputs:
    initial_capital: float       # ILS, equity the buyer brings
    monthly_gross_income: float  # ILS (bruto)
    buyer_type: BuyerType
    dsr: float                   # debt-service ratio, 0.20 - 0.40
    interest_rate: float         # annual blended nominal rate, e.g. 0.051
    term_years: int              # 10 - 30


@dataclass(frozen=True)
class MortgageResults:
    estimated_net_income: int
    max_monthly_payment: int
    max_loan_amount: int
    max_property_price: int
    ltv_limit: float
    total_interest_paid: int
    is_warning: bool             # dsr above the BoI 33% soft ceiling


BindingConstraint = Literal["ltv", "income"]


@dataclass(frozen=True)
class AffordabilityBreakdown:
    """Unrounded intermediates of one calculation, for explaining the result."""
    net_income: float
    max_monthly_by_dsr: float
    max_loan_by_income: float
    max_price_by_ltv: float
    max_price_by_income: float
    max_property_price: float
    final_loan: float
    actual_monthly: float
    total_interest: float
    binding_constraint: BindingConstraint

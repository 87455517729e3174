# src/israstat/analysis/finance.py
from typing import Tuple

from israstat.domain.metrics import round_half_up
from israstat.domain.mortgage import (
    LTV_LIMITS,
    MOST_CONSERVATIVE_BUYER,
    AffordabilityBreakdown,
    MortgageInputs,
    MortgageResults,
)

# (upper bound on monthly gross, net/gross retention), ascending; first match wins.
# Each rate applies to the WHOLE gross, not just the slice inside the bracket.
NET_INCOME_BRACKETS: Tuple[Tuple[float, float], ...] = (
    (7_010.0, 0.88),    # ~12% deductions
    (10_060.0, 0.82),   # ~18%
    (16_150.0, 0.74),   # ~26%
    (22_440.0, 0.68),   # ~32%
    (46_690.0, 0.62),   # ~38%
)
TOP_BRACKET_RETENTION = 0.54  # ~46%+

# BoI soft ceiling; above it the result is flagged, not rejected.
DSR_WARNING_THRESHOLD = 0.33


def estimate_net_income(gross: float) -> float:
    """
    Approximate Israeli netto from bruto monthly income.

    Folds Bituach Leumi, health tax and income tax into one retention
    rate per bracket.
    """
    for upper, retention in NET_INCOME_BRACKETS:
        if gross <= upper:
            return gross * retention
    return gross * TOP_BRACKET_RETENTION


def max_loan_from_payment(monthly_payment: float, annual_rate: float, years: int) -> float:
    """
    Shpitzer (annuity) present value: the largest loan a fixed monthly
    payment can service over the term.

    PV = PMT * (1 - (1+r)^-n) / r
    r = monthly rate, n = number of payments
    """
    r = annual_rate / 12.0
    n = years * 12

    if r == 0:
        return monthly_payment * n

    return monthly_payment * (1 - (1 + r) ** -n) / r


def monthly_payment_from_loan(loan: float, annual_rate: float, years: int) -> float:
    """
    Fixed Shpitzer payment for a loan:
    M = P * r(1+r)^n / ((1+r)^n - 1)
    """
    r = annual_rate / 12.0
    n = years * 12

    if r == 0:
        return loan / n

    growth = (1 + r) ** n
    return loan * r * growth / (growth - 1)


def _ltv_limit(buyer_type: str) -> float:
    # unknown buyer types get the tightest ceiling rather than an error
    return LTV_LIMITS.get(buyer_type, LTV_LIMITS[MOST_CONSERVATIVE_BUYER])


def affordability_breakdown(inputs: MortgageInputs) -> AffordabilityBreakdown:
    """
    Size the purchase under both BoI constraints and keep every
    intermediate unrounded.

    - DSR: monthly repayment <= net income * dsr
    - LTV: capital >= (1 - ltv) * price  ->  price <= capital / (1 - ltv)

    Whichever gives the lower price binds.
    """
    # --- income side ---
    net_income = estimate_net_income(inputs.monthly_gross_income)
    max_monthly = net_income * inputs.dsr
    max_loan_by_income = max_loan_from_payment(max_monthly, inputs.interest_rate, inputs.term_years)

    # --- equity side ---
    ltv = _ltv_limit(inputs.buyer_type)
    max_price_by_ltv = inputs.initial_capital / (1 - ltv)
    max_price_by_income = inputs.initial_capital + max_loan_by_income

    # --- reconcile ---
    max_price = min(max_price_by_ltv, max_price_by_income)
    final_loan = max_price - inputs.initial_capital

    actual_monthly = monthly_payment_from_loan(final_loan, inputs.interest_rate, inputs.term_years)
    total_interest = actual_monthly * inputs.term_years * 12 - final_loan

    return AffordabilityBreakdown(
        net_income=net_income,
        max_monthly_by_dsr=max_monthly,
        max_loan_by_income=max_loan_by_income,
        max_price_by_ltv=max_price_by_ltv,
        max_price_by_income=max_price_by_income,
        max_property_price=max_price,
        final_loan=final_loan,
        actual_monthly=actual_monthly,
        total_interest=total_interest,
        binding_constraint="ltv" if max_price_by_ltv < max_price_by_income else "income",
    )


def results_from_breakdown(inputs: MortgageInputs, b: AffordabilityBreakdown) -> MortgageResults:
    # rounding happens here and only here
    return MortgageResults(
        estimated_net_income=round_half_up(b.net_income),
        max_monthly_payment=round_half_up(b.actual_monthly),
        max_loan_amount=round_half_up(b.final_loan),
        max_property_price=round_half_up(b.max_property_price),
        ltv_limit=_ltv_limit(inputs.buyer_type),
        total_interest_paid=round_half_up(b.total_interest),
        is_warning=inputs.dsr > DSR_WARNING_THRESHOLD,
    )


def calculate_mortgage(inputs: MortgageInputs) -> MortgageResults:
    """
    Core calculation: mortgage inputs in, affordability results out.

    Total over the documented input domain; callers validate ranges.
    """
    return results_from_breakdown(inputs, affordability_breakdown(inputs))

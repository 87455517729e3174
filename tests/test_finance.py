from dataclasses import asdict, replace

import pytest

from israstat.analysis.finance import (
    NET_INCOME_BRACKETS,
    affordability_breakdown,
    calculate_mortgage,
    estimate_net_income,
    max_loan_from_payment,
    monthly_payment_from_loan,
)
from israstat.domain.mortgage import LTV_LIMITS
from fixtures.scenarios import ALL_SCENARIOS, income_bound_default


@pytest.mark.parametrize(
    "gross, expected",
    [
        (5_000, 4_400.0),
        (7_010, 6_168.8),
        (10_000, 8_200.0),
        (16_150, 11_951.0),
        (20_000, 13_600.0),
        (25_000, 15_500.0),
        (60_000, 32_400.0),
    ],
)
def test_net_income_bracket_table(gross, expected):
    assert estimate_net_income(gross) == pytest.approx(expected)


def test_net_income_monotonic_inside_each_bracket():
    lower = 0.0
    for upper, _ in NET_INCOME_BRACKETS:
        g = lower + 1
        while g < upper:
            assert estimate_net_income(g + 1) >= estimate_net_income(g)
            g += 97
        lower = upper


def test_net_income_drops_across_bracket_boundaries():
    """
    The whole gross moves to the lower retention rate once a bound is
    crossed, so one extra shekel of gross costs hundreds of net.
    """
    assert estimate_net_income(7_010) == pytest.approx(6_168.8)
    assert estimate_net_income(7_011) == pytest.approx(5_749.02)
    for upper, _ in NET_INCOME_BRACKETS:
        assert estimate_net_income(upper + 1) < estimate_net_income(upper)


@pytest.mark.parametrize("loan", [150_000.0, 787_560.0, 2_500_000.0])
@pytest.mark.parametrize("rate", [0.0011, 0.03, 0.051, 0.08, 0.149])
@pytest.mark.parametrize("years", [10, 25, 30])
def test_annuity_round_trip(loan, rate, years):
    payment = monthly_payment_from_loan(loan, rate, years)
    assert max_loan_from_payment(payment, rate, years) == pytest.approx(loan, abs=1.0)


def test_zero_rate_is_straight_line():
    assert monthly_payment_from_loan(360_000, 0.0, 30) == 1_000.0
    assert max_loan_from_payment(1_000, 0.0, 30) == 360_000.0


def test_payment_grows_with_rate():
    low = monthly_payment_from_loan(1_000_000, 0.03, 25)
    high = monthly_payment_from_loan(1_000_000, 0.06, 25)
    assert high > low > 1_000_000 / 300


@pytest.mark.parametrize("scenario", ALL_SCENARIOS, ids=lambda s: s.__name__)
def test_calculate_mortgage_reference_scenarios(scenario):
    inputs, expected, binding = scenario()

    results = calculate_mortgage(inputs)

    assert asdict(results) == expected
    assert affordability_breakdown(inputs).binding_constraint == binding


def test_default_scenario_intermediates():
    inputs, _, _ = income_bound_default()

    b = affordability_breakdown(inputs)

    assert b.net_income == pytest.approx(15_500)
    assert b.max_monthly_by_dsr == pytest.approx(4_650)
    assert b.max_price_by_ltv == pytest.approx(3_200_000)
    assert b.max_price_by_income == pytest.approx(1_587_560.178, abs=0.01)
    assert b.max_property_price == min(b.max_price_by_ltv, b.max_price_by_income)
    assert b.final_loan == pytest.approx(b.max_loan_by_income)


def test_price_is_capital_plus_loan(default_inputs):
    for capital in (100_000, 800_000, 2_000_000, 9_000_000):
        r = calculate_mortgage(replace(default_inputs, initial_capital=capital))
        assert r.max_loan_amount >= 0
        assert abs(r.max_property_price - (capital + r.max_loan_amount)) <= 1


def test_ltv_bound_when_equity_is_thin(default_inputs):
    inputs = replace(default_inputs, initial_capital=150_000, monthly_gross_income=80_000, dsr=0.40)

    b = affordability_breakdown(inputs)

    assert b.binding_constraint == "ltv"
    assert b.max_property_price == pytest.approx(b.max_price_by_ltv)
    assert b.final_loan < b.max_loan_by_income


def test_income_bound_when_equity_is_large(default_inputs):
    inputs = replace(default_inputs, initial_capital=5_000_000, monthly_gross_income=15_000)

    b = affordability_breakdown(inputs)

    assert b.binding_constraint == "income"
    assert b.max_property_price == pytest.approx(b.max_price_by_income)


@pytest.mark.parametrize("dsr, warn", [(0.20, False), (0.33, False), (0.34, True), (0.40, True)])
def test_warning_flag_tracks_boi_soft_ceiling(default_inputs, dsr, warn):
    assert calculate_mortgage(replace(default_inputs, dsr=dsr)).is_warning is warn


@pytest.mark.parametrize("buyer_type", list(LTV_LIMITS))
def test_ltv_limit_reported_per_buyer_type(default_inputs, buyer_type):
    r = calculate_mortgage(replace(default_inputs, buyer_type=buyer_type))
    assert r.ltv_limit == LTV_LIMITS[buyer_type]


def test_unknown_buyer_type_gets_investor_ltv(default_inputs):
    r = calculate_mortgage(replace(default_inputs, buyer_type="LANDLORD"))
    assert r.ltv_limit == 0.50


def test_results_are_fresh_and_immutable(default_inputs):
    a = calculate_mortgage(default_inputs)
    b = calculate_mortgage(default_inputs)
    assert a == b
    with pytest.raises(Exception):
        a.max_property_price = 0  # type: ignore[misc]


def test_buyer_tables_checked_even_when_optimized():
    import israstat.domain.mortgage as mortgage_module

    with open(mortgage_module.__file__, encoding="utf-8") as fh:
        source = fh.read()
    broken = source.replace('    "MOVER": 0.70,\n', "")
    assert broken != source

    code = compile(broken, mortgage_module.__file__, "exec", optimize=2)
    with pytest.raises(RuntimeError, match="BuyerType"):
        exec(code, {"__name__": "broken_mortgage"})

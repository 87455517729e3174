import pytest

from israstat.analysis.deal_synth import generate_deals
from israstat.analysis.projections import (
    category_breakdown,
    chart_series,
    deals_frame,
    filter_by_category,
    rolling_trend_line,
)


@pytest.fixture(scope="module")
def summary():
    return generate_deals("Florentin", "Tel Aviv", 52_000, "stable", 40)


def test_rolling_trend_line_reference_points(summary):
    line = rolling_trend_line(summary.deals, window=5)

    assert len(line) == 40
    assert [avg for _, avg in line[:6]] == [43_546, 48_587, 49_599, 51_701, 51_630, 52_029]
    assert line[-1][1] == 54_175
    assert [d for d, _ in line] == [d.date for d in summary.deals]


def test_rolling_window_of_one_is_the_series(summary):
    line = rolling_trend_line(summary.deals, window=1)
    assert [avg for _, avg in line] == [d.price_per_sqm for d in summary.deals]


def test_chart_series_attaches_trend(summary):
    rows = chart_series(summary)
    assert len(rows) == 40
    assert rows[0]["id"] == "florentin-2"
    assert rows[0]["trend_avg"] == rows[0]["price_per_sqm"] == 43_546
    assert rows[1]["trend_avg"] == 48_587


def test_filter_by_category(summary):
    assert filter_by_category(summary.deals, "all") == list(summary.deals)
    market = filter_by_category(summary.deals, "market")
    assert len(market) == 23
    assert all(d.category == "market" for d in market)
    assert filter_by_category(summary.deals, "luxury") == []


def test_category_breakdown_has_every_key(summary):
    assert category_breakdown(summary.deals) == {
        "below-market": 8,
        "market": 23,
        "above-market": 9,
        "luxury": 0,
    }
    assert category_breakdown(()) == {"below-market": 0, "market": 0, "above-market": 0, "luxury": 0}


def test_deals_frame_columns(summary):
    df = deals_frame(summary.deals)
    assert list(df.columns) == ["id", "date", "price", "price_per_sqm", "sqm", "rooms", "floor", "address", "category"]
    assert len(df) == 40
    assert df["price"].min() == summary.price_range[0]
    assert deals_frame(()).empty

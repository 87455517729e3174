import pytest

from israstat.adapters.market_snapshot import find_neighborhood, load_snapshot
from israstat.services.explorer import NeighborhoodNotFound, cached_deals, explore_neighborhood
from israstat.services.opportunities import affordability_report, find_opportunities


def test_snapshot_loads_and_validates():
    snap = load_snapshot()
    assert snap.last_update == "2026-02-17"
    assert len(snap.regions) == 6
    assert len(snap.neighborhoods) == 17
    assert {n.trend for n in snap.neighborhoods} == {"rising", "stable", "cooling"}


def test_find_neighborhood_is_case_insensitive():
    hood = find_neighborhood("florentin")
    assert hood is not None
    assert hood.avg_price_per_sqm == 52_000
    assert find_neighborhood("Florentin", city="haifa") is None
    assert find_neighborhood("Atlantis") is None


def test_opportunities_within_budget_sorted_by_growth():
    hoods = load_snapshot().neighborhoods

    # 1,587,560 * 1.15 = 1,825,694
    picks = find_opportunities(1_587_560, hoods)

    assert [n.name for n in picks] == ["Nahariya Center", "Beer Sheva North", "Tiberias", "Arad"]


def test_opportunities_respect_tolerance():
    hoods = load_snapshot().neighborhoods
    assert [n.name for n in find_opportunities(1_000_000, hoods, tolerance=1.0)] == ["Arad"]
    assert find_opportunities(500_000, hoods) == []
    assert len(find_opportunities(50_000_000, hoods)) == 17


def test_affordability_report_bundles_everything():
    report = affordability_report({})

    assert report["results"]["max_property_price"] == 1_587_560
    assert report["breakdown"]["binding_constraint"] == "income"
    assert report["buyer"] == {
        "type": "FIRST_HOME",
        "label": "1st Home",
        "description": "First-time buyer, up to 75% financing",
    }
    assert [o["name"] for o in report["opportunities"]][:2] == ["Nahariya Center", "Beer Sheva North"]


def test_explore_neighborhood_payload():
    payload = explore_neighborhood("Florentin")

    assert payload["total_deals"] == 40
    assert payload["median_price"] == 4_920_698
    assert payload["price_range"] == [2_359_632, 7_038_736]
    assert payload["neighborhood"]["city"] == "Tel Aviv"
    assert payload["category_counts"]["market"] == 23
    assert len(payload["trend_line"]) == 40
    assert payload["category_colors"]["luxury"] == "#9333EA"


def test_explore_neighborhood_category_filter():
    payload = explore_neighborhood("Florentin", category="below-market")
    assert len(payload["deals"]) == 8
    # stats always describe the whole batch
    assert payload["total_deals"] == 40


def test_explore_neighborhood_errors():
    with pytest.raises(NeighborhoodNotFound):
        explore_neighborhood("Atlantis")
    with pytest.raises(ValueError):
        explore_neighborhood("Florentin", category="bargain")


def test_generated_batches_are_memoized():
    a = cached_deals("Arad", "South", 10_500.0, "stable", 7)
    b = cached_deals("Arad", "South", 10_500.0, "stable", 7)
    assert a is b

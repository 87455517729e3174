# src/israstat/adapters/market_snapshot.py
"""
Static CBS market snapshot that feeds the opportunity explorer.

Read-only reference data; refreshing it means editing this table.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from israstat.domain.market import MarketSnapshot, Neighborhood

_SNAPSHOT: dict[str, Any] = {
    "last_update": "2026-02-17",
    "cpi_value": 103.3,
    "cpi_change": -0.3,
    "construction_index": 101.3,
    "construction_change": 0.1,
    "regions": [
        {"id": "tlv", "name": "Tel Aviv", "name_he": "תל אביב", "annual_growth": 5.2, "avg_price_per_sqm": 58_000},
        {"id": "ctr", "name": "Center", "name_he": "מרכז", "annual_growth": 4.5, "avg_price_per_sqm": 36_000},
        {"id": "jlm", "name": "Jerusalem", "name_he": "ירושלים", "annual_growth": 4.0, "avg_price_per_sqm": 38_500},
        {"id": "hfa", "name": "Haifa", "name_he": "חיפה", "annual_growth": 3.1, "avg_price_per_sqm": 22_000},
        {"id": "sth", "name": "South", "name_he": "דרום", "annual_growth": 2.0, "avg_price_per_sqm": 17_500},
        {"id": "nth", "name": "North", "name_he": "צפון", "annual_growth": 2.5, "avg_price_per_sqm": 18_200},
    ],
    "neighborhoods": [
        {"name": "Neve Tzedek", "name_he": "נווה צדק", "city": "Tel Aviv", "avg_price": 6_500_000, "avg_price_per_sqm": 72_000, "trend": "rising", "rooms": "3–4", "year_over_year": 6.1},
        {"name": "Florentin", "name_he": "פלורנטין", "city": "Tel Aviv", "avg_price": 3_800_000, "avg_price_per_sqm": 52_000, "trend": "stable", "rooms": "3", "year_over_year": 3.2},
        {"name": "Lev HaIr", "name_he": "לב העיר", "city": "Tel Aviv", "avg_price": 4_200_000, "avg_price_per_sqm": 55_000, "trend": "rising", "rooms": "3", "year_over_year": 4.8},
        {"name": "Ramat Aviv", "name_he": "רמת אביב", "city": "Tel Aviv", "avg_price": 5_800_000, "avg_price_per_sqm": 62_000, "trend": "rising", "rooms": "4", "year_over_year": 5.5},
        {"name": "Rehavia", "name_he": "רחביה", "city": "Jerusalem", "avg_price": 4_200_000, "avg_price_per_sqm": 42_000, "trend": "rising", "rooms": "3–4", "year_over_year": 4.3},
        {"name": "Arnona", "name_he": "ארנונה", "city": "Jerusalem", "avg_price": 3_100_000, "avg_price_per_sqm": 33_000, "trend": "stable", "rooms": "4", "year_over_year": 2.8},
        {"name": "German Colony", "name_he": "המושבה הגרמנית", "city": "Jerusalem", "avg_price": 5_000_000, "avg_price_per_sqm": 48_000, "trend": "rising", "rooms": "4", "year_over_year": 3.9},
        {"name": "Bat Galim", "name_he": "בת גלים", "city": "Haifa", "avg_price": 2_200_000, "avg_price_per_sqm": 24_000, "trend": "rising", "rooms": "3–4", "year_over_year": 4.1},
        {"name": "Denya", "name_he": "דניה", "city": "Haifa", "avg_price": 3_500_000, "avg_price_per_sqm": 28_000, "trend": "cooling", "rooms": "4–5", "year_over_year": -0.5},
        {"name": "Carmel Center", "name_he": "מרכז הכרמל", "city": "Haifa", "avg_price": 2_800_000, "avg_price_per_sqm": 26_000, "trend": "stable", "rooms": "4", "year_over_year": 1.8},
        {"name": "Kfar Saba Center", "name_he": "כפר סבא מרכז", "city": "Center", "avg_price": 2_900_000, "avg_price_per_sqm": 30_000, "trend": "rising", "rooms": "4", "year_over_year": 5.0},
        {"name": "Ra'anana North", "name_he": "רעננה צפון", "city": "Center", "avg_price": 4_100_000, "avg_price_per_sqm": 38_000, "trend": "rising", "rooms": "4–5", "year_over_year": 4.6},
        {"name": "Rehovot Center", "name_he": "רחובות מרכז", "city": "Center", "avg_price": 2_600_000, "avg_price_per_sqm": 27_000, "trend": "stable", "rooms": "4", "year_over_year": 2.9},
        {"name": "Beer Sheva North", "name_he": "באר שבע צפון", "city": "South", "avg_price": 1_650_000, "avg_price_per_sqm": 16_000, "trend": "rising", "rooms": "4", "year_over_year": 3.5},
        {"name": "Arad", "name_he": "ערד", "city": "South", "avg_price": 980_000, "avg_price_per_sqm": 10_500, "trend": "stable", "rooms": "4", "year_over_year": 1.2},
        {"name": "Nahariya Center", "name_he": "נהריה מרכז", "city": "North", "avg_price": 1_500_000, "avg_price_per_sqm": 15_500, "trend": "rising", "rooms": "4", "year_over_year": 3.8},
        {"name": "Tiberias", "name_he": "טבריה", "city": "North", "avg_price": 1_100_000, "avg_price_per_sqm": 12_000, "trend": "stable", "rooms": "3–4", "year_over_year": 1.5},
    ],
    "alerts": [
        "Housing price index rose 0.7% in December 2025, marking 8 consecutive months of growth.",
        "Average mortgage interest rate stabilized around 5.1% (blended, Jan 2026).",
        "Construction input costs increased 0.1%, signaling potential supply-side pressure.",
    ],
}


@lru_cache(maxsize=1)
def load_snapshot() -> MarketSnapshot:
    return MarketSnapshot.model_validate(_SNAPSHOT)


def find_neighborhood(name: str, city: str | None = None) -> Neighborhood | None:
    """
    Case-insensitive lookup by neighborhood name, optionally pinned to a city.
    Returns None when nothing matches.
    """
    key = name.strip().lower()
    city_key = city.strip().lower() if city else None
    for n in load_snapshot().neighborhoods:
        if n.name.lower() != key:
            continue
        if city_key is not None and n.city.lower() != city_key:
            continue
        return n
    return None

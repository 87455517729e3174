# src/israstat/domain/deals.py
from dataclasses import dataclass
from typing import Dict, Literal, Tuple, get_args

Trend = Literal["rising", "stable", "cooling"]
DealCategory = Literal["below-market", "market", "above-market", "luxury"]
TrendDirection = Literal["up", "down", "flat"]

TRENDS: tuple[str, ...] = get_args(Trend)
DEAL_CATEGORIES: tuple[str, ...] = get_args(DealCategory)

# Lowest drift; what an unrecognised trend falls back to.
MOST_CONSERVATIVE_TREND: Trend = "cooling"

# Monthly price/sqm drift applied when synthesizing deals
TREND_SLOPES: Dict[str, float] = {
    "rising": 0.003,
    "stable": 0.0005,
    "cooling": -0.0015,
}

CATEGORY_LABELS: Dict[str, str] = {
    "below-market": "Below Market",
    "market": "Market Rate",
    "above-market": "Above Market",
    "luxury": "Luxury",
}

CATEGORY_COLORS: Dict[str, str] = {
    "below-market": "#14694D",
    "market": "#C8A84E",
    "above-market": "#D97706",
    "luxury": "#9333EA",
}

if set(TREND_SLOPES) != set(TRENDS):
    raise RuntimeError("TREND_SLOPES must cover every Trend")
for _table in (CATEGORY_LABELS, CATEGORY_COLORS):
    if set(_table) != set(DEAL_CATEGORIES):
        raise RuntimeError("category tables must cover every DealCategory")


@dataclass(frozen=True)
class Deal:
    id: str                 # unique within one generated batch only
    date: str               # YYYY-MM-DD
    price: int              # ILS
    price_per_sqm: int      # ILS / sqm
    sqm: int
    rooms: float            # 2, 2.5, ... 5
    floor: int              # 1 - 15
    address: str
    category: DealCategory


@dataclass(frozen=True)
class DealSummary:
    neighborhood_name: str
    city: str
    total_deals: int
    median_price: int
    median_price_per_sqm: int
    price_range: Tuple[int, int]
    trend_direction: TrendDirection
    deals: Tuple[Deal, ...]

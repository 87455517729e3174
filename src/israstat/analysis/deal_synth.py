# src/israstat/analysis/deal_synth.py
"""
Synthetic comparable deals for a neighborhood.

Deals are seeded by neighborhood + city, so the same neighborhood always
produces the same batch. A live transactions feed can replace
`generate_deals` as long as it returns a DealSummary.
"""
from __future__ import annotations

import re
from datetime import date
from typing import List, Sequence

from israstat.analysis.prng import Mulberry32, seed_from_string
from israstat.domain.deals import (
    MOST_CONSERVATIVE_TREND,
    TREND_SLOPES,
    Deal,
    DealCategory,
    DealSummary,
    TrendDirection,
)
from israstat.domain.metrics import mean, round_half_up, upper_median

# "now" for the synthetic history; deals span the 24 months before it
ANCHOR_DATE = date(2026, 2, 1)
HISTORY_MONTHS = 24
MAX_DAY_OF_MONTH = 27  # every month has at least this many days

# multiplicative noise on price/sqm: 0.82 .. 1.18
NOISE_FLOOR = 0.82
NOISE_SPAN = 0.36

ROOM_OPTIONS: tuple[float, ...] = (2, 2.5, 3, 3.5, 4, 4.5, 5)
SQM_PER_ROOM = 22
SQM_JITTER = 15
MAX_FLOOR = 15
MAX_HOUSE_NUMBER = 80

STREET_NAMES: tuple[str, ...] = (
    "Herzl", "Rothschild", "Ben Gurion", "Jabotinsky", "Weizmann",
    "HaNassi", "HaRav Kook", "Dizengoff", "Bialik", "Nordau",
    "Sokolov", "Basel", "Allenby", "King George", "Arlozorov",
    "Ben Yehuda", "HaYarkon", "Trumpeldor", "Sheinkin", "Nahalat Binyamin",
    "Kaplan", "Begin", "HaMelech David", "Emek Refaim", "Derech Hevron",
)

# ratio of deal price/sqm to the neighborhood average; upper bounds inclusive
BELOW_MARKET_BELOW = 0.88
MARKET_UP_TO = 1.12
ABOVE_MARKET_UP_TO = 1.35

# half-over-half move in mean price/sqm that counts as a direction
TREND_DIRECTION_THRESHOLD = 0.02

_WHITESPACE = re.compile(r"\s")


def classify_deal(price_per_sqm: float, avg_price_per_sqm: float) -> DealCategory:
    ratio = price_per_sqm / avg_price_per_sqm
    if ratio < BELOW_MARKET_BELOW:
        return "below-market"
    if ratio <= MARKET_UP_TO:
        return "market"
    if ratio <= ABOVE_MARKET_UP_TO:
        return "above-market"
    return "luxury"


def deal_slug(neighborhood_name: str) -> str:
    # one dash per whitespace char, no collapsing
    return _WHITESPACE.sub("-", neighborhood_name).lower()


def months_before(anchor: date, months_back: int, day: int) -> date:
    idx = anchor.year * 12 + (anchor.month - 1) - months_back
    year, month0 = divmod(idx, 12)
    return date(year, month0 + 1, day)


def measure_trend_direction(deals: Sequence[Deal]) -> TrendDirection:
    """
    Compare mean price/sqm of the older half against the newer half of a
    date-sorted batch. This is a property of the sample, so it can
    disagree with the trend the batch was generated with.
    """
    half = len(deals) // 2
    if half == 0:
        return "flat"

    first = mean([d.price_per_sqm for d in deals[:half]])
    second = mean([d.price_per_sqm for d in deals[half:]])
    pct = (second - first) / first

    if pct > TREND_DIRECTION_THRESHOLD:
        return "up"
    if pct < -TREND_DIRECTION_THRESHOLD:
        return "down"
    return "flat"


def _synthesize_deal(
    rand: Mulberry32,
    index: int,
    slug: str,
    avg_price_per_sqm: float,
    monthly_slope: float,
) -> Deal:
    # draw order below is fixed; changing it changes every batch

    # --- when ---
    months_back = rand.randint_below(HISTORY_MONTHS)
    day = 1 + rand.randint_below(MAX_DAY_OF_MONTH)
    deal_date = months_before(ANCHOR_DATE, months_back, day)

    # --- price/sqm: trend line + noise ---
    trend_adjustment = 1 + monthly_slope * (HISTORY_MONTHS - months_back)
    noise = NOISE_FLOOR + rand() * NOISE_SPAN
    price_per_sqm = round_half_up(avg_price_per_sqm * trend_adjustment * noise)

    # --- apartment ---
    rooms = rand.choice(ROOM_OPTIONS)
    sqm = round_half_up(rooms * SQM_PER_ROOM + rand() * SQM_JITTER)
    floor = rand.randint_below(MAX_FLOOR) + 1
    street = rand.choice(STREET_NAMES)
    house_number = rand.randint_below(MAX_HOUSE_NUMBER) + 1

    return Deal(
        id=f"{slug}-{index}",
        date=deal_date.isoformat(),
        price=round_half_up(price_per_sqm * sqm),
        price_per_sqm=price_per_sqm,
        sqm=sqm,
        rooms=rooms,
        floor=floor,
        address=f"{street} {house_number}",
        category=classify_deal(price_per_sqm, avg_price_per_sqm),
    )


def summarize_deals(neighborhood_name: str, city: str, deals: Sequence[Deal]) -> DealSummary:
    """
    Sort a batch chronologically and attach the headline statistics.

    Medians are upper medians (index n // 2). An empty batch summarizes to
    zeros and a flat direction.
    """
    ordered = tuple(sorted(deals, key=lambda d: d.date))

    if not ordered:
        return DealSummary(
            neighborhood_name=neighborhood_name,
            city=city,
            total_deals=0,
            median_price=0,
            median_price_per_sqm=0,
            price_range=(0, 0),
            trend_direction="flat",
            deals=(),
        )

    prices = sorted(d.price for d in ordered)
    per_sqm = [d.price_per_sqm for d in ordered]

    return DealSummary(
        neighborhood_name=neighborhood_name,
        city=city,
        total_deals=len(ordered),
        median_price=upper_median(prices),
        median_price_per_sqm=upper_median(per_sqm),
        price_range=(prices[0], prices[-1]),
        trend_direction=measure_trend_direction(ordered),
        deals=ordered,
    )


def generate_deals(
    neighborhood_name: str,
    city: str,
    avg_price_per_sqm: float,
    trend: str,
    count: int = 40,
) -> DealSummary:
    """
    Deterministically synthesize `count` historical deals for a neighborhood.

    Same (neighborhood_name, city, avg_price_per_sqm, trend, count) always
    gives an identical DealSummary. Unknown trends drift like "cooling".
    """
    rand = Mulberry32(seed_from_string(neighborhood_name + city))
    monthly_slope = TREND_SLOPES.get(trend, TREND_SLOPES[MOST_CONSERVATIVE_TREND])
    slug = deal_slug(neighborhood_name)

    deals: List[Deal] = [
        _synthesize_deal(rand, i, slug, avg_price_per_sqm, monthly_slope)
        for i in range(max(count, 0))
    ]

    return summarize_deals(neighborhood_name, city, deals)

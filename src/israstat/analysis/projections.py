# src/israstat/analysis/projections.py
"""
Read-only projections over a DealSummary for charts and lists.

Nothing here feeds back into the synthesizer; any consumer can rebuild
these from the deal batch alone.
"""
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Sequence, Tuple

import pandas as pd

from israstat.domain.deals import DEAL_CATEGORIES, Deal, DealSummary
from israstat.domain.metrics import round_half_up

DEAL_COLUMNS = ["id", "date", "price", "price_per_sqm", "sqm", "rooms", "floor", "address", "category"]


def deals_frame(deals: Sequence[Deal]) -> pd.DataFrame:
    """One row per deal, in the order given, with the Deal field names as columns."""
    if not deals:
        return pd.DataFrame(columns=DEAL_COLUMNS)
    return pd.DataFrame([asdict(d) for d in deals], columns=DEAL_COLUMNS)


def rolling_trend_line(deals: Sequence[Deal], window: int = 5) -> List[Tuple[str, int]]:
    """
    Trailing mean of price/sqm over up to `window` chronologically ordered
    deals (fewer at the start of the series), rounded half-up.
    """
    if not deals:
        return []

    df = deals_frame(sorted(deals, key=lambda d: d.date))
    avg = df["price_per_sqm"].astype(float).rolling(window=window, min_periods=1).mean()

    return [(d, round_half_up(a)) for d, a in zip(df["date"], avg)]


def chart_series(summary: DealSummary, window: int = 5) -> List[Dict[str, Any]]:
    """
    Scatter points for every deal with the rolling trend value attached.

    summary.deals is already date-sorted, so row i lines up with trend
    point i.
    """
    trend = rolling_trend_line(summary.deals, window=window)
    rows: List[Dict[str, Any]] = []
    for i, d in enumerate(summary.deals):
        rows.append(
            {
                "id": d.id,
                "date": d.date,
                "price_per_sqm": d.price_per_sqm,
                "price": d.price,
                "rooms": d.rooms,
                "sqm": d.sqm,
                "category": d.category,
                "trend_avg": trend[i][1],
            }
        )
    return rows


def filter_by_category(deals: Sequence[Deal], category: str = "all") -> List[Deal]:
    if category == "all":
        return list(deals)
    return [d for d in deals if d.category == category]


def category_breakdown(deals: Sequence[Deal]) -> Dict[str, int]:
    """Deal count per category; every category is present, zero if unused."""
    if not deals:
        return {c: 0 for c in DEAL_CATEGORIES}
    counts = deals_frame(deals)["category"].value_counts()
    counts = counts.reindex(list(DEAL_CATEGORIES), fill_value=0)
    return {c: int(n) for c, n in counts.items()}

# src/israstat/services/explorer.py
from __future__ import annotations

import logging
from dataclasses import asdict
from functools import lru_cache
from typing import Any, Dict

from israstat.adapters.config import config
from israstat.adapters.logging_utils import get_logger, log_context
from israstat.adapters.market_snapshot import find_neighborhood
from israstat.analysis.deal_synth import generate_deals
from israstat.analysis.projections import (
    category_breakdown,
    chart_series,
    filter_by_category,
    rolling_trend_line,
)
from israstat.domain.deals import CATEGORY_COLORS, CATEGORY_LABELS, DEAL_CATEGORIES, DealSummary
from israstat.services.validation import InvalidInputError, normalize_trend, prepare_deal_count

logger = get_logger(__name__)


class NeighborhoodNotFound(LookupError):
    pass


@lru_cache(maxsize=256)
def cached_deals(
    neighborhood_name: str,
    city: str,
    avg_price_per_sqm: float,
    trend: str,
    count: int,
) -> DealSummary:
    # batches are a pure function of the arguments and immutable
    summary = generate_deals(neighborhood_name, city, avg_price_per_sqm, trend, count)
    log_context(
        logger,
        logging.DEBUG,
        "deals generated",
        neighborhood=neighborhood_name,
        city=city,
        count=count,
        trend=trend,
        trend_direction=summary.trend_direction,
    )
    return summary


def summary_payload(summary: DealSummary, category: str = "all", window: int | None = None) -> Dict[str, Any]:
    """
    Serializable view of a batch: headline stats, the (optionally filtered)
    deal list, the rolling trend line and per-category counts.
    """
    if category != "all" and category not in DEAL_CATEGORIES:
        raise InvalidInputError("category", f"must be 'all' or one of {', '.join(DEAL_CATEGORIES)}")
    window = window or config.TREND_WINDOW

    return {
        "neighborhood_name": summary.neighborhood_name,
        "city": summary.city,
        "total_deals": summary.total_deals,
        "median_price": summary.median_price,
        "median_price_per_sqm": summary.median_price_per_sqm,
        "price_range": list(summary.price_range),
        "trend_direction": summary.trend_direction,
        "category": category,
        "deals": [asdict(d) for d in filter_by_category(summary.deals, category)],
        "trend_line": [{"date": d, "avg": a} for d, a in rolling_trend_line(summary.deals, window=window)],
        "chart": chart_series(summary, window=window),
        "category_counts": category_breakdown(summary.deals),
        "category_labels": dict(CATEGORY_LABELS),
        "category_colors": dict(CATEGORY_COLORS),
    }


def explore_neighborhood(
    name: str,
    city: str | None = None,
    count: Any = None,
    category: str = "all",
) -> Dict[str, Any]:
    """
    Deal explorer for a snapshot neighborhood.

    Raises NeighborhoodNotFound for names outside the snapshot and
    InvalidInputError for a bad count or category.
    """
    hood = find_neighborhood(name, city)
    if hood is None:
        raise NeighborhoodNotFound(f"unknown neighborhood: {name}" + (f" ({city})" if city else ""))

    n = prepare_deal_count(count)
    summary = cached_deals(hood.name, hood.city, hood.avg_price_per_sqm, normalize_trend(hood.trend), n)

    payload = summary_payload(summary, category=category)
    payload["neighborhood"] = hood.model_dump()
    return payload

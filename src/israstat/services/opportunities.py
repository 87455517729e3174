# src/israstat/services/opportunities.py
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, Iterable, List

from israstat.adapters.config import config
from israstat.adapters.logging_utils import get_logger, log_context
from israstat.adapters.market_snapshot import load_snapshot
from israstat.analysis.finance import affordability_breakdown, results_from_breakdown
from israstat.domain.market import Neighborhood
from israstat.domain.mortgage import BUYER_DESCRIPTIONS, BUYER_LABELS
from israstat.services.validation import prepare_mortgage_inputs

logger = get_logger(__name__)


def find_opportunities(
    max_property_price: float,
    neighborhoods: Iterable[Neighborhood],
    tolerance: float | None = None,
) -> List[Neighborhood]:
    """
    Neighborhoods whose typical price is within budget, allowing some
    headroom (default 15% over), best year-over-year growth first.

    Ties keep snapshot order.
    """
    if tolerance is None:
        tolerance = config.BUDGET_TOLERANCE
    ceiling = max_property_price * tolerance
    within = [n for n in neighborhoods if n.avg_price <= ceiling]
    return sorted(within, key=lambda n: n.year_over_year, reverse=True)


def affordability_report(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Everything the calculator screen needs for one set of inputs:
    rounded results, the unrounded breakdown, buyer labels and the
    neighborhoods that fit the budget.

    Raises InvalidInputError on out-of-domain inputs.
    """
    inputs = prepare_mortgage_inputs(raw)
    breakdown = affordability_breakdown(inputs)
    results = results_from_breakdown(inputs, breakdown)

    opportunities = find_opportunities(results.max_property_price, load_snapshot().neighborhoods)

    log_context(
        logger,
        logging.INFO,
        "mortgage calculated",
        buyer_type=inputs.buyer_type,
        dsr=inputs.dsr,
        max_property_price=results.max_property_price,
        binding_constraint=breakdown.binding_constraint,
        is_warning=results.is_warning,
        opportunities=len(opportunities),
    )

    return {
        "inputs": asdict(inputs),
        "results": asdict(results),
        "breakdown": asdict(breakdown),
        "buyer": {
            "type": inputs.buyer_type,
            "label": BUYER_LABELS[inputs.buyer_type],
            "description": BUYER_DESCRIPTIONS[inputs.buyer_type],
        },
        "opportunities": [n.model_dump() for n in opportunities],
    }

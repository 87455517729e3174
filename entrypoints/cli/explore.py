from __future__ import annotations

import json
import sys
from typing import Any, Optional

import typer
from loguru import logger

from israstat.adapters.logging_utils import route_logs_to
from israstat.adapters.market_snapshot import load_snapshot
from israstat.services.explorer import NeighborhoodNotFound, explore_neighborhood
from israstat.services.opportunities import affordability_report
from israstat.services.validation import InvalidInputError

app = typer.Typer(help="Israstat explorer (mortgage affordability + synthetic comparable deals).")


@app.callback()
def main() -> None:
    # stdout is reserved for the JSON payload; service logs go to stderr
    route_logs_to(sys.stderr)


def _emit(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


def _fail(err: Exception) -> typer.Exit:
    logger.error("Request rejected: {}", err)
    return typer.Exit(code=2)


def _mortgage_payload(
    capital: Optional[float],
    income: Optional[float],
    buyer_type: Optional[str],
    dsr: Optional[str],
    rate: Optional[str],
    term: Optional[int],
) -> dict[str, Any]:
    return {
        "initial_capital": capital,
        "monthly_gross_income": income,
        "buyer_type": buyer_type,
        "dsr": dsr,
        "interest_rate": rate,
        "term_years": term,
    }


@app.command()
def mortgage(
    capital: Optional[float] = typer.Option(None, help="Initial capital (ILS)"),
    income: Optional[float] = typer.Option(None, help="Monthly gross income (ILS)"),
    buyer_type: Optional[str] = typer.Option(None, help="FIRST_HOME | MOVER | INVESTOR"),
    dsr: Optional[str] = typer.Option(None, help="Debt-service ratio, e.g. 0.30 or 30%"),
    rate: Optional[str] = typer.Option(None, help="Annual interest rate, e.g. 0.051 or 5.1%"),
    term: Optional[int] = typer.Option(None, help="Loan term in years (10-30)"),
) -> None:
    """
    Estimate maximum affordable property price under BoI limits.
    """
    try:
        report = affordability_report(_mortgage_payload(capital, income, buyer_type, dsr, rate, term))
    except InvalidInputError as e:
        raise _fail(e) from e

    logger.info(
        "Max property price {price} ({constraint}-bound)",
        price=report["results"]["max_property_price"],
        constraint=report["breakdown"]["binding_constraint"],
    )
    if report["results"]["is_warning"]:
        logger.warning("DSR above the 33% BoI soft ceiling")
    report.pop("opportunities")
    _emit(report)


@app.command()
def opportunities(
    capital: Optional[float] = typer.Option(None, help="Initial capital (ILS)"),
    income: Optional[float] = typer.Option(None, help="Monthly gross income (ILS)"),
    buyer_type: Optional[str] = typer.Option(None, help="FIRST_HOME | MOVER | INVESTOR"),
    dsr: Optional[str] = typer.Option(None, help="Debt-service ratio"),
    rate: Optional[str] = typer.Option(None, help="Annual interest rate"),
    term: Optional[int] = typer.Option(None, help="Loan term in years"),
) -> None:
    """
    Neighborhoods within budget (15% headroom), best YoY growth first.
    """
    try:
        report = affordability_report(_mortgage_payload(capital, income, buyer_type, dsr, rate, term))
    except InvalidInputError as e:
        raise _fail(e) from e

    logger.info(
        "{n} of {total} neighborhoods within budget",
        n=len(report["opportunities"]),
        total=len(load_snapshot().neighborhoods),
    )
    _emit(report["opportunities"])


@app.command()
def deals(
    neighborhood: str = typer.Argument(..., help="Neighborhood name, e.g. Florentin"),
    city: Optional[str] = typer.Option(None, help="City, when the name is ambiguous"),
    count: Optional[int] = typer.Option(None, help="Number of deals (default 40)"),
    category: str = typer.Option("all", help="all | below-market | market | above-market | luxury"),
) -> None:
    """
    Synthetic comparable deals and summary stats for a snapshot neighborhood.
    """
    try:
        payload = explore_neighborhood(neighborhood, city=city, count=count, category=category)
    except (NeighborhoodNotFound, InvalidInputError) as e:
        raise _fail(e) from e

    logger.info(
        "{name}: {n} deals, median {median}/sqm, trend {direction}",
        name=payload["neighborhood_name"],
        n=payload["total_deals"],
        median=payload["median_price_per_sqm"],
        direction=payload["trend_direction"],
    )
    payload.pop("chart")
    _emit(payload)


if __name__ == "__main__":
    app()

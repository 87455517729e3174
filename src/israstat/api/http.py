# src/israstat/api/http.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Query

from israstat.adapters.config import config
from israstat.adapters.market_snapshot import load_snapshot
from israstat.domain.market import MarketSnapshot
from israstat.services.explorer import (
    NeighborhoodNotFound,
    cached_deals,
    explore_neighborhood,
    summary_payload,
)
from israstat.services.opportunities import affordability_report
from israstat.services.validation import InvalidInputError, prepare_deal_request
from .schemas import DealSummaryResponse, GenerateDealsRequest, MortgageRequest, MortgageResponse

app = FastAPI(title="israstat")


@app.get("/health")
def health() -> dict[str, Any]:
    return {"status": "ok", "env": config.ENV}


@app.get("/market", response_model=MarketSnapshot)
def market() -> MarketSnapshot:
    return load_snapshot()


@app.post("/mortgage", response_model=MortgageResponse)
def mortgage_endpoint(payload: MortgageRequest) -> MortgageResponse:
    """
    Affordability under BoI constraints, plus neighborhoods within budget.
    """
    try:
        report = affordability_report(payload.model_dump())
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return MortgageResponse(**report)


@app.get("/neighborhoods/{name}/deals", response_model=DealSummaryResponse)
def neighborhood_deals(
    name: str,
    city: str | None = Query(None, description="Disambiguate by city"),
    count: int | None = Query(None, description="Deals to synthesize (default 40)"),
    category: str = Query("all", description="all|below-market|market|above-market|luxury"),
) -> DealSummaryResponse:
    try:
        payload = explore_neighborhood(name, city=city, count=count, category=category)
    except NeighborhoodNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return DealSummaryResponse(**payload)


@app.post("/deals/generate", response_model=DealSummaryResponse)
def generate_deals_endpoint(body: GenerateDealsRequest) -> DealSummaryResponse:
    """
    Ad-hoc synthesis for a neighborhood that isn't in the snapshot.
    """
    try:
        kwargs = prepare_deal_request(body.model_dump())
        summary = cached_deals(**kwargs)
        payload = summary_payload(summary, category=body.category)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return DealSummaryResponse(**payload)

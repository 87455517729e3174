# src/israstat/api/schemas.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict


# --------------------------------------------
# Mortgage calculator
# --------------------------------------------

Number = float | int | str


class MortgageRequest(BaseModel):
    """
    Calculator payload for /mortgage.

    Every field is optional (config defaults fill the gaps) and accepts
    numbers, numeric strings or percent strings like "30%" / "5.1%".
    Range checks happen in services.validation so errors name the field.
    """
    model_config = ConfigDict(extra="ignore")

    initial_capital: Number | None = None
    monthly_gross_income: Number | None = None
    buyer_type: str | None = None
    dsr: Number | None = None
    interest_rate: Number | None = None
    term_years: Number | None = None


class MortgageResultsOut(BaseModel):
    estimated_net_income: int
    max_monthly_payment: int
    max_loan_amount: int
    max_property_price: int
    ltv_limit: float
    total_interest_paid: int
    is_warning: bool


class BuyerOut(BaseModel):
    type: str
    label: str
    description: str


class MortgageResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    inputs: dict[str, Any]
    results: MortgageResultsOut
    breakdown: dict[str, Any]
    buyer: BuyerOut
    opportunities: list[dict[str, Any]]


# --------------------------------------------
# Deal explorer
# --------------------------------------------

class DealOut(BaseModel):
    id: str
    date: str
    price: int
    price_per_sqm: int
    sqm: int
    rooms: float
    floor: int
    address: str
    category: str


class TrendPoint(BaseModel):
    date: str
    avg: int


class DealSummaryResponse(BaseModel):
    """
    Headline stats + deals for one neighborhood.
    Permissive so the explorer can grow fields without breaking clients.
    """
    model_config = ConfigDict(extra="allow")

    neighborhood_name: str
    city: str
    total_deals: int
    median_price: int
    median_price_per_sqm: int
    price_range: list[int]
    trend_direction: str
    category: str = "all"
    deals: list[DealOut]
    trend_line: list[TrendPoint]
    category_counts: dict[str, int]


class GenerateDealsRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    neighborhood_name: str
    city: str
    avg_price_per_sqm: Number
    trend: str = "stable"
    count: Number | None = None
    category: str = "all"

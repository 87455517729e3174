# src/israstat/domain/market.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from israstat.domain.deals import Trend


class Region(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_he: str
    annual_growth: float = Field(..., description="YoY %, e.g. 5.2")
    avg_price_per_sqm: float


class Neighborhood(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    name_he: str
    city: str
    avg_price: float = Field(..., description="Typical deal price in ILS")
    avg_price_per_sqm: float
    trend: Trend
    rooms: str = Field(..., description="Typical apartment size, e.g. '3–4'")
    year_over_year: float = Field(..., description="% change, e.g. 3.2")


class MarketSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    last_update: str
    cpi_value: float
    cpi_change: float
    construction_index: float
    construction_change: float
    regions: list[Region]
    neighborhoods: list[Neighborhood]
    alerts: list[str]

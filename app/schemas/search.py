"""
Pydantic schemas for search and market statistics.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from decimal import Decimal
from app.models.listing import ListingStatus


class ListingSearchRequest(BaseModel):
    """
    Search filters. Every filter is optional and filters combine with AND.
    The status filter defaults to active.
    """

    model_config = ConfigDict(populate_by_name=True)

    city: Optional[str] = Field(None, examples=["Cairo"])
    property_type: Optional[str] = Field(None, alias="propertyType", examples=["apartment"])
    min_price: Optional[Decimal] = Field(None, ge=0, alias="minPrice")
    max_price: Optional[Decimal] = Field(None, ge=0, alias="maxPrice")
    status: Optional[ListingStatus] = None


class StatisticsOverview(BaseModel):
    total_listings: int
    active_listings: int
    sold_listings: int
    avg_price: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class CityStatistics(BaseModel):
    city: str
    listing_count: int
    avg_price: Optional[float] = None


class PropertyTypeStatistics(BaseModel):
    type: str
    listing_count: int
    avg_price: Optional[float] = None


class MarketStatisticsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    overview: StatisticsOverview
    top_cities: List[CityStatistics] = Field(..., alias="topCities")
    property_types: List[PropertyTypeStatistics] = Field(..., alias="propertyTypes")

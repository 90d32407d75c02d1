"""
Pydantic schemas for favorites.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
import uuid


class FavoriteRequest(BaseModel):
    """Body of both add and remove requests."""

    listing_id: uuid.UUID


class FavoriteListingResponse(BaseModel):
    """A favorited listing as seen from the user's favorites page."""

    id: uuid.UUID = Field(..., description="Listing ID")
    price: float
    status: str
    property_type: Optional[str] = None
    description: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    favorited_at: datetime


class FavoriteCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_favorited: bool = Field(..., alias="isFavorited")

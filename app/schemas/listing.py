"""
Pydantic schemas for listing requests and responses.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from app.models.listing import ListingStatus
import uuid


class ListingCreateRequest(BaseModel):
    """
    Listing creation request. Presence of property_id, location_id and price
    is checked by the service so the caller gets a single combined message.
    """

    property_id: Optional[uuid.UUID] = None
    location_id: Optional[uuid.UUID] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2, examples=[250000])
    status: Optional[ListingStatus] = Field(None, description="Defaults to active")


class ListingUpdateRequest(BaseModel):
    """Only price and status may change on a listing."""

    price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    status: Optional[ListingStatus] = None


class ListingCreatedResponse(BaseModel):
    message: str
    id: uuid.UUID


class ImageCreateRequest(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=500, examples=["https://cdn.example.com/1.jpg"])


class ImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    listing_id: uuid.UUID
    image_url: str
    created_at: datetime


class ListingSummary(BaseModel):
    """Denormalized listing row used by every list endpoint."""

    id: uuid.UUID
    price: float
    status: str
    created_at: datetime
    property_type: Optional[str] = None
    description: Optional[str] = None
    city: Optional[str] = None
    area: Optional[str] = None
    address: Optional[str] = None
    owner_name: Optional[str] = None
    image_count: int = 0
    favorite_count: int = 0
    image_url: Optional[str] = Field(None, description="URL of the primary image")


class OwnerListingSummary(ListingSummary):
    inquiry_count: int = 0


class ListingDetail(ListingSummary):
    """Single listing with owner contact details and all images."""

    property_id: uuid.UUID
    location_id: uuid.UUID
    updated_at: Optional[datetime] = None
    owner_id: Optional[uuid.UUID] = None
    owner_email: Optional[str] = None
    images: List[ImageResponse] = Field(default_factory=list)
    inquiry_count: int = 0

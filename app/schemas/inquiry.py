"""
Pydantic schemas for inquiries.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid


class InquiryCreateRequest(BaseModel):
    listing_id: Optional[uuid.UUID] = None
    message: Optional[str] = Field(None, max_length=5000, examples=["Is the price negotiable?"])


class InquiryCreatedResponse(BaseModel):
    message: str
    inquiry_id: uuid.UUID


class ListingInquiryResponse(BaseModel):
    """Inquiry as listed for a listing, with the sender's contact details."""

    id: uuid.UUID
    message: str
    created_at: datetime
    user_name: Optional[str] = None
    user_email: Optional[str] = None


class UserInquiryResponse(BaseModel):
    """Inquiry as listed for its sender, with a summary of the listing."""

    id: uuid.UUID
    message: str
    created_at: datetime
    listing_id: uuid.UUID
    property_type: Optional[str] = None
    city: Optional[str] = None
    price: Optional[float] = None

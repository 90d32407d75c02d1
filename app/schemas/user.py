"""
Pydantic schemas for user requests and responses.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
import uuid


class UserResponse(BaseModel):
    """Full user view. The password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(..., description="User's unique identifier")
    name: str = Field(..., description="User's display name", examples=["Jane Doe"])
    email: str = Field(..., description="User's email address", examples=["jane@example.com"])
    phone: Optional[str] = Field(None, description="Contact phone number")
    address: Optional[str] = Field(None, description="Postal address")
    role: str = Field(..., description="User's role", examples=["buyer"])
    is_active: bool = Field(..., description="Whether the account may log in")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")


class UserPublicResponse(BaseModel):
    """Directory view of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    role: str
    created_at: datetime


class ProfileUpdateRequest(BaseModel):
    """Fields a user may change on their own profile. Absent fields are left as they are."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)


class RoleUpdateRequest(BaseModel):
    role: Optional[str] = Field(None, description="New role", examples=["seller"])


class StatusUpdateRequest(BaseModel):
    is_active: bool = Field(..., description="New active flag")


class UserMessageResponse(BaseModel):
    message: str
    user: UserResponse


class DeletedUserResponse(BaseModel):
    """Admin delete result carrying the pre-delete snapshot."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    deleted_user: UserResponse = Field(..., alias="deletedUser")


class ActivityFavorite(BaseModel):
    id: uuid.UUID = Field(..., description="Favorited listing ID")
    type: Optional[str] = None
    city: Optional[str] = None
    price: float
    created_at: datetime


class ActivityInquiry(BaseModel):
    id: uuid.UUID
    message: str
    created_at: datetime
    listing_id: uuid.UUID
    type: Optional[str] = None
    city: Optional[str] = None


class ActivityProperty(BaseModel):
    id: uuid.UUID
    type: str
    description: Optional[str] = None
    created_at: datetime
    listing_count: int


class ActivityStats(BaseModel):
    favorite_count: int
    inquiry_count: int
    property_count: int


class UserActivityResponse(BaseModel):
    """Everything a user has done on the marketplace."""

    user: UserPublicResponse
    favorites: List[ActivityFavorite]
    inquiries: List[ActivityInquiry]
    properties: List[ActivityProperty]
    stats: ActivityStats

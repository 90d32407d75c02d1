"""
Pydantic schemas for properties and locations.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
import uuid


class PropertyCreateRequest(BaseModel):
    """Property creation request. The owner is always the caller."""

    type: str = Field(..., min_length=1, max_length=50, examples=["apartment"])
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v):
        v = v.strip().lower()
        if not v:
            raise ValueError("Property type cannot be empty")
        return v


class PropertyUpdateRequest(BaseModel):
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v):
        if v is None:
            return v
        v = v.strip().lower()
        if not v:
            raise ValueError("Property type cannot be empty")
        return v


class PropertyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    owner_id: uuid.UUID
    owner_name: Optional[str] = None
    type: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class LocationCreateRequest(BaseModel):
    city: str = Field(..., min_length=1, max_length=100, examples=["Cairo"])
    area: Optional[str] = Field(None, max_length=100, examples=["Zamalek"])
    address: Optional[str] = Field(None, max_length=255)

    @field_validator("city")
    @classmethod
    def strip_city(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("City cannot be empty")
        return v


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    city: str
    area: Optional[str] = None
    address: Optional[str] = None

"""
Pydantic schemas for authentication requests and responses.

Required credential fields are declared optional here so the service can
answer a missing field with the marketplace's own message instead of a
generic validation error.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from app.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    """Registration request schema."""

    name: Optional[str] = Field(None, max_length=255, examples=["Jane Doe"])
    email: Optional[EmailStr] = Field(None, examples=["jane@example.com"])
    password: Optional[str] = Field(None, max_length=128, examples=["secret123"])
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    role: Optional[str] = Field(None, description="Defaults to buyer", examples=["seller"])

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        if v is not None:
            return v.lower().strip()
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        if v is not None:
            return v.strip()
        return v


class LoginRequest(BaseModel):
    """Login request schema."""

    email: Optional[str] = Field(None, examples=["jane@example.com"])
    password: Optional[str] = Field(None, examples=["secret123"])


class ChangePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: Optional[str] = Field(None, alias="currentPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")


class AuthResponse(BaseModel):
    """Returned by register and login."""

    message: str
    token: str = Field(..., description="Signed JWT, valid for 7 days")
    user: UserResponse


class MessageResponse(BaseModel):
    message: str

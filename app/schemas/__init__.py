"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    RegisterRequest,
    LoginRequest,
    ChangePasswordRequest,
    AuthResponse,
    MessageResponse
)

# User schemas
from .user import (
    UserResponse,
    UserPublicResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    StatusUpdateRequest,
    UserMessageResponse,
    DeletedUserResponse,
    UserActivityResponse
)

# Property and location schemas
from .property import (
    PropertyCreateRequest,
    PropertyUpdateRequest,
    PropertyResponse,
    LocationCreateRequest,
    LocationResponse
)

# Listing schemas
from .listing import (
    ListingCreateRequest,
    ListingUpdateRequest,
    ListingCreatedResponse,
    ListingSummary,
    OwnerListingSummary,
    ListingDetail,
    ImageCreateRequest,
    ImageResponse
)

from .favorite import FavoriteRequest, FavoriteListingResponse, FavoriteCheckResponse
from .inquiry import (
    InquiryCreateRequest,
    InquiryCreatedResponse,
    ListingInquiryResponse,
    UserInquiryResponse
)
from .search import ListingSearchRequest, MarketStatisticsResponse
from .error import ErrorResponse, ERROR_RESPONSES

__all__ = [
    # Authentication
    "RegisterRequest",
    "LoginRequest",
    "ChangePasswordRequest",
    "AuthResponse",
    "MessageResponse",

    # User
    "UserResponse",
    "UserPublicResponse",
    "ProfileUpdateRequest",
    "RoleUpdateRequest",
    "StatusUpdateRequest",
    "UserMessageResponse",
    "DeletedUserResponse",
    "UserActivityResponse",

    # Property
    "PropertyCreateRequest",
    "PropertyUpdateRequest",
    "PropertyResponse",
    "LocationCreateRequest",
    "LocationResponse",

    # Listing
    "ListingCreateRequest",
    "ListingUpdateRequest",
    "ListingCreatedResponse",
    "ListingSummary",
    "OwnerListingSummary",
    "ListingDetail",
    "ImageCreateRequest",
    "ImageResponse",

    # Favorites and inquiries
    "FavoriteRequest",
    "FavoriteListingResponse",
    "FavoriteCheckResponse",
    "InquiryCreateRequest",
    "InquiryCreatedResponse",
    "ListingInquiryResponse",
    "UserInquiryResponse",

    # Search
    "ListingSearchRequest",
    "MarketStatisticsResponse",

    # Errors
    "ErrorResponse",
    "ERROR_RESPONSES",
]

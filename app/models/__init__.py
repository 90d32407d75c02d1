"""
Database models for the Property Marketplace API.
Includes users, properties, locations, listings, images, favorites and inquiries.
"""

from app.models.user import User, UserRole
from app.models.property import Property, Location
from app.models.listing import Listing, ListingStatus
from app.models.image import PropertyImage
from app.models.favorite import Favorite
from app.models.inquiry import Inquiry

# Export all models for easy importing
__all__ = [
    "User",
    "UserRole",
    "Property",
    "Location",
    "Listing",
    "ListingStatus",
    "PropertyImage",
    "Favorite",
    "Inquiry",
]

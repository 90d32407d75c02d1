"""
Repository layer for data access operations.
"""

from app.repositories.base import BaseRepository
from app.repositories.user import UserRepository
from app.repositories.property import PropertyRepository, LocationRepository
from app.repositories.listing import ListingRepository, ListingRow
from app.repositories.favorite import FavoriteRepository
from app.repositories.inquiry import InquiryRepository
from app.repositories.search import SearchRepository, ListingSearchFilters

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PropertyRepository",
    "LocationRepository",
    "ListingRepository",
    "ListingRow",
    "FavoriteRepository",
    "InquiryRepository",
    "SearchRepository",
    "ListingSearchFilters",
]

"""
Service layer for business logic implementation.
"""

from .auth import AuthService
from .property import PropertyService
from .listing import ListingService
from .favorite import FavoriteService
from .inquiry import InquiryService
from .search import SearchService
from .user import UserService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "ListingService",
    "FavoriteService",
    "InquiryService",
    "SearchService",
    "UserService",
    "ErrorHandlerService"
]

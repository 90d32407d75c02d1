"""
API route handlers for the Property Marketplace API.
"""

from .auth import router as auth_router
from .listings import router as listings_router
from .favorites import router as favorites_router
from .inquiries import router as inquiries_router
from .search import router as search_router
from .users import router as users_router
from .properties import router as properties_router, locations_router

__all__ = [
    "auth_router",
    "listings_router",
    "favorites_router",
    "inquiries_router",
    "search_router",
    "users_router",
    "properties_router",
    "locations_router",
]

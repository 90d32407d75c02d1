"""
User directory service: public listing of users and per-user activity reports.
"""

from typing import List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.user import UserRepository
from app.repositories.favorite import FavoriteRepository
from app.repositories.inquiry import InquiryRepository
from app.repositories.property import PropertyRepository
from app.models.user import User, UserRole
from app.utils.exceptions import NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.favorite_repo = FavoriteRepository(db_session)
        self.inquiry_repo = InquiryRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def list_users(self) -> List[User]:
        return await self.user_repo.list_all()

    async def get_user(self, user_id: uuid.UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    async def list_by_role(self, role: str) -> List[User]:
        """Users holding `role`; an unknown role simply matches nobody."""
        try:
            user_role = UserRole(role)
        except ValueError:
            logger.debug(f"Directory lookup for unknown role: {role}")
            return []
        return await self.user_repo.list_by_role(user_role)

    async def get_activity(self, user_id: uuid.UUID) -> Dict[str, Any]:
        """
        Build an activity report for one user.

        Returns:
            Dictionary with the user, their favorites, inquiries, owned
            properties (with listing counts) and summary counters
        """
        user = await self.get_user(user_id)

        favorites = []
        for favorite, listing in await self.favorite_repo.list_for_user(user_id):
            favorites.append({
                "id": listing.id,
                "type": listing.listed_property.type if listing.listed_property else None,
                "city": listing.location.city if listing.location else None,
                "price": float(listing.price),
                "created_at": favorite.created_at,
            })

        inquiries = []
        for inquiry in await self.inquiry_repo.list_for_user(user_id):
            listing = inquiry.listing
            inquiries.append({
                "id": inquiry.id,
                "message": inquiry.message,
                "created_at": inquiry.created_at,
                "listing_id": inquiry.listing_id,
                "type": listing.listed_property.type if listing and listing.listed_property else None,
                "city": listing.location.city if listing and listing.location else None,
            })

        properties = [
            {
                "id": prop.id,
                "type": prop.type,
                "description": prop.description,
                "created_at": prop.created_at,
                "listing_count": listing_count,
            }
            for prop, listing_count in await self.property_repo.get_by_owner_with_listing_counts(user_id)
        ]

        return {
            "user": user.to_public_dict(),
            "favorites": favorites,
            "inquiries": inquiries,
            "properties": properties,
            "stats": {
                "favorite_count": len(favorites),
                "inquiry_count": len(inquiries),
                "property_count": len(properties),
            },
        }

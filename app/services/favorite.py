"""
Favorite service.
"""

from typing import List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.favorite import FavoriteRepository
from app.repositories.listing import ListingRepository
from app.repositories.user import UserRepository
from app.utils.auth import TokenPayload
from app.utils.exceptions import ListingNotFoundError, FavoriteNotFoundError, NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteService:
    """Favorites are created and removed only by the user they belong to."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.favorite_repo = FavoriteRepository(db_session)
        self.listing_repo = ListingRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def list_for_user(self, user_id: uuid.UUID) -> List[Dict[str, Any]]:
        favorites = await self.favorite_repo.list_for_user(user_id)
        results = []
        for favorite, listing in favorites:
            prop = listing.listed_property
            location = listing.location
            results.append({
                "id": listing.id,
                "price": float(listing.price),
                "status": listing.status.value,
                "property_type": prop.type if prop else None,
                "description": prop.description if prop else None,
                "city": location.city if location else None,
                "area": location.area if location else None,
                "favorited_at": favorite.created_at,
            })
        return results

    async def is_favorited(self, user_id: uuid.UUID, listing_id: uuid.UUID) -> bool:
        return await self.favorite_repo.is_favorited(user_id, listing_id)

    async def add_favorite(self, actor: TokenPayload, listing_id: uuid.UUID) -> None:
        """
        Raises:
            NotFoundError: If the caller's account no longer exists
            ListingNotFoundError: If the listing does not exist
            AlreadyFavoritedError: If the caller already favorited it
        """
        if not await self.user_repo.exists(actor.user_id):
            raise NotFoundError("User")

        if not await self.listing_repo.exists(listing_id):
            raise ListingNotFoundError()

        await self.favorite_repo.add(actor.user_id, listing_id)

    async def remove_favorite(self, actor: TokenPayload, listing_id: uuid.UUID) -> None:
        if not await self.favorite_repo.remove(actor.user_id, listing_id):
            raise FavoriteNotFoundError()

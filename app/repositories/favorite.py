"""
Favorite repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, desc, and_
from sqlalchemy.exc import IntegrityError
from app.repositories.base import BaseRepository
from app.models.favorite import Favorite
from app.models.listing import Listing
from app.utils.exceptions import AlreadyFavoritedError
from typing import Optional, List, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[Favorite]):
    """Repository for (user, listing) favorites."""

    def __init__(self, db: AsyncSession):
        super().__init__(Favorite, db)

    async def get_pair(self, user_id: uuid.UUID, listing_id: uuid.UUID) -> Optional[Favorite]:
        result = await self.db.execute(
            select(Favorite).where(
                and_(Favorite.user_id == user_id, Favorite.listing_id == listing_id)
            )
        )
        return result.scalar_one_or_none()

    async def is_favorited(self, user_id: uuid.UUID, listing_id: uuid.UUID) -> bool:
        return await self.count({"user_id": user_id, "listing_id": listing_id}) > 0

    async def add(self, user_id: uuid.UUID, listing_id: uuid.UUID) -> Favorite:
        """
        Favorite a listing.

        Raises:
            AlreadyFavoritedError: If the pair already exists, including when a
                concurrent request inserted it first
            IntegrityError: For any other constraint violation
        """
        if await self.get_pair(user_id, listing_id):
            raise AlreadyFavoritedError()

        try:
            favorite = await self.create({"user_id": user_id, "listing_id": listing_id})
        except IntegrityError as e:
            if "unique" not in str(e.orig).lower():
                raise
            logger.info(f"Concurrent favorite insert for user {user_id}, listing {listing_id}")
            raise AlreadyFavoritedError()

        logger.info(f"User {user_id} favorited listing {listing_id}")
        return favorite

    async def remove(self, user_id: uuid.UUID, listing_id: uuid.UUID) -> bool:
        try:
            result = await self.db.execute(
                delete(Favorite).where(
                    and_(Favorite.user_id == user_id, Favorite.listing_id == listing_id)
                )
            )
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to remove favorite for user {user_id}: {e}")
            raise

        removed = result.rowcount > 0
        if removed:
            logger.info(f"User {user_id} unfavorited listing {listing_id}")
        return removed

    async def list_for_user(self, user_id: uuid.UUID) -> List[Tuple[Favorite, Listing]]:
        """A user's favorites with the favorited listing, most recent first."""
        result = await self.db.execute(
            select(Favorite, Listing)
            .join(Listing, Favorite.listing_id == Listing.id)
            .where(Favorite.user_id == user_id)
            .order_by(desc(Favorite.created_at))
            .execution_options(populate_existing=True)
        )
        return [(favorite, listing) for favorite, listing in result.all()]

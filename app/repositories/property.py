"""
Property and location repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc
from app.repositories.base import BaseRepository
from app.models.property import Property, Location
from app.models.listing import Listing
from typing import List, Dict, Any, Tuple, Optional
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """Repository for properties and their ownership."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        prop = await self.create(property_data)
        logger.info(f"Created property {prop.id} for owner {prop.owner_id}")
        return prop

    async def get_owner_id(self, property_id: uuid.UUID) -> Optional[uuid.UUID]:
        """Owner of a property, or None when the property does not exist."""
        result = await self.db.execute(
            select(Property.owner_id).where(Property.id == property_id)
        )
        return result.scalar_one_or_none()

    async def get_by_owner(self, owner_id: uuid.UUID) -> List[Property]:
        result = await self.db.execute(
            select(Property)
            .where(Property.owner_id == owner_id)
            .order_by(desc(Property.created_at))
        )
        return list(result.scalars().all())

    async def get_by_owner_with_listing_counts(
        self, owner_id: uuid.UUID
    ) -> List[Tuple[Property, int]]:
        """Owned properties paired with how many listings reference each."""
        listing_count = (
            select(func.count(Listing.id))
            .where(Listing.property_id == Property.id)
            .correlate(Property)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(Property, listing_count)
            .where(Property.owner_id == owner_id)
            .order_by(desc(Property.created_at))
        )
        return [(prop, count or 0) for prop, count in result.all()]


class LocationRepository(BaseRepository[Location]):
    """Repository for locations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Location, db)

    async def list_all(self) -> List[Location]:
        result = await self.db.execute(
            select(Location).order_by(Location.city, Location.area, Location.address)
        )
        return list(result.scalars().all())

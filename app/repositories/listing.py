"""
Listing repository.
Listing reads are denormalized: each listing row is paired with its favorite
and inquiry counts, computed as correlated subqueries so a single query serves
list, filter and detail views.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc, and_
from app.repositories.base import BaseRepository
from app.models.listing import Listing, ListingStatus
from app.models.property import Property, Location
from app.models.favorite import Favorite
from app.models.inquiry import Inquiry
from app.models.image import PropertyImage
from typing import Optional, List, Dict, Any, Tuple
import uuid
import logging

logger = logging.getLogger(__name__)


class ListingRow:
    """A listing together with its aggregate counters."""

    def __init__(self, listing: Listing, favorite_count: int = 0, inquiry_count: int = 0):
        self.listing = listing
        self.favorite_count = favorite_count or 0
        self.inquiry_count = inquiry_count or 0

    def to_dict(self) -> dict:
        data = self.listing.to_dict()
        data["favorite_count"] = self.favorite_count
        return data

    def to_detail_dict(self) -> dict:
        data = self.listing.to_detail_dict()
        data["favorite_count"] = self.favorite_count
        data["inquiry_count"] = self.inquiry_count
        return data

    def to_owner_dict(self) -> dict:
        """Dashboard view for the listing's owner."""
        data = self.to_dict()
        data["inquiry_count"] = self.inquiry_count
        return data


def favorite_count_column():
    return (
        select(func.count(Favorite.id))
        .where(Favorite.listing_id == Listing.id)
        .correlate(Listing)
        .scalar_subquery()
    )


def inquiry_count_column():
    return (
        select(func.count(Inquiry.id))
        .where(Inquiry.listing_id == Listing.id)
        .correlate(Listing)
        .scalar_subquery()
    )


class ListingRepository(BaseRepository[Listing]):
    """Repository for listings and their images."""

    def __init__(self, db: AsyncSession):
        super().__init__(Listing, db)

    def _rows_query(self):
        return (
            select(Listing, favorite_count_column(), inquiry_count_column())
            .join(Property, Listing.property_id == Property.id)
            .join(Location, Listing.location_id == Location.id)
            .execution_options(populate_existing=True)
        )

    async def find_rows(
        self,
        conditions: Optional[List] = None,
        order_by: Optional[List] = None
    ) -> List[ListingRow]:
        """
        Run a listing query with the given predicates.

        Args:
            conditions: SQLAlchemy boolean expressions, combined with AND
            order_by: Ordering clauses, newest first when omitted

        Returns:
            List of ListingRow
        """
        try:
            query = self._rows_query()
            if conditions:
                query = query.where(and_(*conditions))
            query = query.order_by(*(order_by or [desc(Listing.created_at)]))

            result = await self.db.execute(query)
            rows = [ListingRow(listing, fav, inq) for listing, fav, inq in result.all()]
            logger.debug(f"Listing query returned {len(rows)} rows")
            return rows
        except Exception as e:
            logger.error(f"Failed to query listings: {e}")
            raise

    async def get_row(self, listing_id: uuid.UUID) -> Optional[ListingRow]:
        rows = await self.find_rows([Listing.id == listing_id])
        return rows[0] if rows else None

    async def list_all(self) -> List[ListingRow]:
        return await self.find_rows()

    async def list_by_status(self, status: ListingStatus) -> List[ListingRow]:
        return await self.find_rows([Listing.status == status])

    async def list_by_city(self, city: str) -> List[ListingRow]:
        """Active listings in a city, cheapest first."""
        return await self.find_rows(
            [Location.city == city, Listing.status == ListingStatus.ACTIVE],
            order_by=[Listing.price, desc(Listing.created_at)]
        )

    async def list_by_owner(self, owner_id: uuid.UUID) -> List[ListingRow]:
        return await self.find_rows([Property.owner_id == owner_id])

    async def get_owner_id(self, listing_id: uuid.UUID) -> Tuple[bool, Optional[uuid.UUID]]:
        """
        Resolve the owner of a listing through its property.

        Returns:
            (exists, owner_id)
        """
        result = await self.db.execute(
            select(Listing.id, Property.owner_id)
            .join(Property, Listing.property_id == Property.id)
            .where(Listing.id == listing_id)
        )
        row = result.first()
        if row is None:
            return False, None
        return True, row.owner_id

    async def get_status(self, listing_id: uuid.UUID) -> Optional[ListingStatus]:
        result = await self.db.execute(
            select(Listing.status).where(Listing.id == listing_id)
        )
        return result.scalar_one_or_none()

    async def create_listing(self, listing_data: Dict[str, Any]) -> Listing:
        listing = await self.create(listing_data)
        logger.info(f"Created listing {listing.id} for property {listing.property_id}")
        return listing

    async def update_listing(self, listing_id: uuid.UUID, changes: Dict[str, Any]) -> Optional[Listing]:
        listing = await self.get_by_id(listing_id)
        if listing is None:
            return None
        return await self.update(listing, changes)

    async def get_images(self, listing_id: uuid.UUID) -> List[PropertyImage]:
        result = await self.db.execute(
            select(PropertyImage)
            .where(PropertyImage.listing_id == listing_id)
            .order_by(PropertyImage.created_at)
        )
        return list(result.scalars().all())

    async def add_image(self, listing_id: uuid.UUID, image_url: str) -> PropertyImage:
        try:
            image = PropertyImage(listing_id=listing_id, image_url=image_url)
            self.db.add(image)
            await self.db.commit()
            await self.db.refresh(image)
            logger.info(f"Added image {image.id} to listing {listing_id}")
            return image
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to add image to listing {listing_id}: {e}")
            raise

"""
Search and reporting queries over listings.
All queries here are read-only.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, case, desc
from app.models.listing import Listing, ListingStatus
from app.models.property import Property, Location
from app.repositories.listing import ListingRepository, ListingRow
from decimal import Decimal
from typing import Optional, List, Dict, Any
import logging

logger = logging.getLogger(__name__)


class ListingSearchFilters:
    """Data class for listing search filters."""

    def __init__(
        self,
        city: Optional[str] = None,
        property_type: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        status: Optional[ListingStatus] = None
    ):
        self.city = city
        self.property_type = property_type
        self.min_price = min_price
        self.max_price = max_price
        self.status = status or ListingStatus.ACTIVE

    def conditions(self) -> List:
        """
        Build SQLAlchemy filter conditions from the search filters.
        Absent filters contribute nothing; the status filter is always present.
        """
        conditions = [Listing.status == self.status]

        if self.city:
            conditions.append(Location.city == self.city)

        if self.property_type:
            conditions.append(Property.type == self.property_type)

        if self.min_price is not None:
            conditions.append(Listing.price >= self.min_price)

        if self.max_price is not None:
            conditions.append(Listing.price <= self.max_price)

        return conditions


def _money(value) -> Optional[float]:
    return round(float(value), 2) if value is not None else None


class SearchRepository:
    """Read-only queries backing search, facets and market statistics."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.listings = ListingRepository(db)

    async def search(self, filters: ListingSearchFilters) -> List[ListingRow]:
        rows = await self.listings.find_rows(filters.conditions())
        logger.debug(f"Search returned {len(rows)} listings")
        return rows

    async def get_cities(self) -> List[str]:
        result = await self.db.execute(
            select(Location.city).distinct().order_by(Location.city)
        )
        return list(result.scalars().all())

    async def get_property_types(self) -> List[str]:
        result = await self.db.execute(
            select(Property.type).distinct().order_by(Property.type)
        )
        return list(result.scalars().all())

    async def get_statistics(self) -> Dict[str, Any]:
        """
        Market statistics.

        Returns:
            Dictionary with an overview over all listings, the five cities
            with the most active listings, and active listings per property type
        """
        try:
            overview_result = await self.db.execute(
                select(
                    func.count(Listing.id),
                    func.count(case((Listing.status == ListingStatus.ACTIVE, 1))),
                    func.count(case((Listing.status == ListingStatus.SOLD, 1))),
                    func.avg(Listing.price),
                    func.min(Listing.price),
                    func.max(Listing.price),
                )
            )
            total, active, sold, avg_price, min_price, max_price = overview_result.one()

            listing_count = func.count(Listing.id).label("listing_count")

            city_result = await self.db.execute(
                select(Location.city, listing_count, func.avg(Listing.price))
                .join(Listing, Listing.location_id == Location.id)
                .where(Listing.status == ListingStatus.ACTIVE)
                .group_by(Location.city)
                .order_by(desc(listing_count), Location.city)
                .limit(5)
            )

            type_result = await self.db.execute(
                select(Property.type, listing_count, func.avg(Listing.price))
                .join(Listing, Listing.property_id == Property.id)
                .where(Listing.status == ListingStatus.ACTIVE)
                .group_by(Property.type)
                .order_by(desc(listing_count), Property.type)
            )

            statistics = {
                "overview": {
                    "total_listings": total or 0,
                    "active_listings": active or 0,
                    "sold_listings": sold or 0,
                    "avg_price": _money(avg_price),
                    "min_price": _money(min_price),
                    "max_price": _money(max_price),
                },
                "top_cities": [
                    {"city": city, "listing_count": count, "avg_price": _money(avg)}
                    for city, count, avg in city_result.all()
                ],
                "property_types": [
                    {"type": prop_type, "listing_count": count, "avg_price": _money(avg)}
                    for prop_type, count, avg in type_result.all()
                ],
            }

            logger.debug("Generated market statistics")
            return statistics
        except Exception as e:
            logger.error(f"Failed to get market statistics: {e}")
            raise

"""
Search and reporting service. Read-only and unauthenticated.
"""

from typing import List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.search import SearchRepository, ListingSearchFilters
from app.repositories.listing import ListingRow
from app.schemas.search import ListingSearchRequest
import logging

logger = logging.getLogger(__name__)


class SearchService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.search_repo = SearchRepository(db_session)

    async def search_listings(self, request: ListingSearchRequest) -> List[ListingRow]:
        filters = ListingSearchFilters(
            city=request.city,
            property_type=request.property_type,
            min_price=request.min_price,
            max_price=request.max_price,
            status=request.status,
        )
        return await self.search_repo.search(filters)

    async def get_cities(self) -> List[str]:
        return await self.search_repo.get_cities()

    async def get_property_types(self) -> List[str]:
        return await self.search_repo.get_property_types()

    async def get_statistics(self) -> Dict[str, Any]:
        return await self.search_repo.get_statistics()

"""
Search and market statistics endpoints. All public.
"""

from fastapi import APIRouter, Depends
from typing import List
from app.services.search import SearchService
from app.schemas.listing import ListingSummary
from app.schemas.search import ListingSearchRequest, MarketStatisticsResponse
from app.schemas.error import ERROR_RESPONSES
from app.utils.dependencies import get_search_service


router = APIRouter(prefix="/search", tags=["Search"], responses=ERROR_RESPONSES)


@router.post(
    "",
    response_model=List[ListingSummary],
    summary="Search listings",
    description="Filters combine with AND; status defaults to active"
)
async def search_listings(
    filters: ListingSearchRequest,
    search_service: SearchService = Depends(get_search_service)
) -> List[ListingSummary]:
    rows = await search_service.search_listings(filters)
    return [ListingSummary.model_validate(row.to_dict()) for row in rows]


@router.get("/cities", response_model=List[str], summary="Distinct cities")
async def get_cities(search_service: SearchService = Depends(get_search_service)) -> List[str]:
    return await search_service.get_cities()


@router.get("/property-types", response_model=List[str], summary="Distinct property types")
async def get_property_types(search_service: SearchService = Depends(get_search_service)) -> List[str]:
    return await search_service.get_property_types()


@router.get(
    "/statistics",
    response_model=MarketStatisticsResponse,
    summary="Market statistics",
)
async def get_statistics(
    search_service: SearchService = Depends(get_search_service)
) -> MarketStatisticsResponse:
    statistics = await search_service.get_statistics()
    return MarketStatisticsResponse.model_validate(statistics)

"""
Listing API endpoints.
Reads are public; create, update, delete and the seller dashboard require a
seller or admin token.
"""

from fastapi import APIRouter, Depends, status
from typing import List
import uuid
from app.models.listing import ListingStatus
from app.services.listing import ListingService
from app.schemas.auth import MessageResponse
from app.schemas.listing import (
    ListingCreateRequest,
    ListingUpdateRequest,
    ListingCreatedResponse,
    ListingSummary,
    OwnerListingSummary,
    ListingDetail,
    ImageCreateRequest,
    ImageResponse
)
from app.schemas.error import ERROR_RESPONSES
from app.utils.auth import TokenPayload
from app.utils.dependencies import get_listing_service, require_seller_or_admin


router = APIRouter(prefix="/listings", tags=["Listings"], responses=ERROR_RESPONSES)


# Literal paths are registered before /{listing_id}

@router.get(
    "",
    response_model=List[ListingSummary],
    summary="List all listings",
)
async def list_listings(
    listing_service: ListingService = Depends(get_listing_service)
) -> List[ListingSummary]:
    rows = await listing_service.list_listings()
    return [ListingSummary.model_validate(row.to_dict()) for row in rows]


@router.get(
    "/seller/my-listings",
    response_model=List[OwnerListingSummary],
    summary="Seller dashboard",
    description="Sellers see the listings of their own properties; admins see every listing"
)
async def my_listings(
    actor: TokenPayload = Depends(require_seller_or_admin),
    listing_service: ListingService = Depends(get_listing_service)
) -> List[OwnerListingSummary]:
    rows = await listing_service.list_for_dashboard(actor)
    return [OwnerListingSummary.model_validate(row.to_owner_dict()) for row in rows]


@router.get(
    "/status/{listing_status}",
    response_model=List[ListingSummary],
    summary="List listings by status",
)
async def list_by_status(
    listing_status: ListingStatus,
    listing_service: ListingService = Depends(get_listing_service)
) -> List[ListingSummary]:
    rows = await listing_service.list_by_status(listing_status)
    return [ListingSummary.model_validate(row.to_dict()) for row in rows]


@router.get(
    "/city/{city}",
    response_model=List[ListingSummary],
    summary="Active listings in a city, cheapest first",
)
async def list_by_city(
    city: str,
    listing_service: ListingService = Depends(get_listing_service)
) -> List[ListingSummary]:
    rows = await listing_service.list_by_city(city)
    return [ListingSummary.model_validate(row.to_dict()) for row in rows]


@router.get(
    "/{listing_id}",
    response_model=ListingDetail,
    summary="Get listing details",
)
async def get_listing(
    listing_id: uuid.UUID,
    listing_service: ListingService = Depends(get_listing_service)
) -> ListingDetail:
    row = await listing_service.get_listing(listing_id)
    return ListingDetail.model_validate(row.to_detail_dict())


@router.get(
    "/{listing_id}/images",
    response_model=List[ImageResponse],
    summary="List a listing's images",
)
async def get_listing_images(
    listing_id: uuid.UUID,
    listing_service: ListingService = Depends(get_listing_service)
) -> List[ImageResponse]:
    images = await listing_service.get_images(listing_id)
    return [ImageResponse.model_validate(image) for image in images]


@router.post(
    "/{listing_id}/images",
    response_model=ImageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Attach an image URL to a listing",
)
async def add_listing_image(
    listing_id: uuid.UUID,
    data: ImageCreateRequest,
    actor: TokenPayload = Depends(require_seller_or_admin),
    listing_service: ListingService = Depends(get_listing_service)
) -> ImageResponse:
    image = await listing_service.add_image(actor, listing_id, data)
    return ImageResponse.model_validate(image)


@router.post(
    "",
    response_model=ListingCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create listing",
    description="Sellers may only list their own properties; admins may list any"
)
async def create_listing(
    data: ListingCreateRequest,
    actor: TokenPayload = Depends(require_seller_or_admin),
    listing_service: ListingService = Depends(get_listing_service)
) -> ListingCreatedResponse:
    listing = await listing_service.create_listing(actor, data)
    return ListingCreatedResponse(message="Listing created successfully", id=listing.id)


@router.put(
    "/{listing_id}",
    response_model=MessageResponse,
    summary="Update listing price and/or status",
)
async def update_listing(
    listing_id: uuid.UUID,
    data: ListingUpdateRequest,
    actor: TokenPayload = Depends(require_seller_or_admin),
    listing_service: ListingService = Depends(get_listing_service)
) -> MessageResponse:
    await listing_service.update_listing(actor, listing_id, data)
    return MessageResponse(message="Listing updated successfully")


@router.delete(
    "/{listing_id}",
    response_model=MessageResponse,
    summary="Delete listing",
)
async def delete_listing(
    listing_id: uuid.UUID,
    actor: TokenPayload = Depends(require_seller_or_admin),
    listing_service: ListingService = Depends(get_listing_service)
) -> MessageResponse:
    await listing_service.delete_listing(actor, listing_id)
    return MessageResponse(message="Listing deleted successfully")

"""
Favorites API endpoints.
"""

from fastapi import APIRouter, Depends, status
from typing import List
import uuid
from app.services.favorite import FavoriteService
from app.schemas.auth import MessageResponse
from app.schemas.favorite import FavoriteRequest, FavoriteListingResponse, FavoriteCheckResponse
from app.schemas.error import ERROR_RESPONSES
from app.utils.auth import TokenPayload
from app.utils.dependencies import get_favorite_service, get_current_actor


router = APIRouter(prefix="/favorites", tags=["Favorites"], responses=ERROR_RESPONSES)


@router.get(
    "/user/{user_id}",
    response_model=List[FavoriteListingResponse],
    summary="List a user's favorite listings",
)
async def list_user_favorites(
    user_id: uuid.UUID,
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> List[FavoriteListingResponse]:
    favorites = await favorite_service.list_for_user(user_id)
    return [FavoriteListingResponse.model_validate(item) for item in favorites]


@router.get(
    "/check/{user_id}/{listing_id}",
    response_model=FavoriteCheckResponse,
    summary="Check whether a user favorited a listing",
)
async def check_favorite(
    user_id: uuid.UUID,
    listing_id: uuid.UUID,
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteCheckResponse:
    favorited = await favorite_service.is_favorited(user_id, listing_id)
    return FavoriteCheckResponse(is_favorited=favorited)


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a listing to the caller's favorites",
)
async def add_favorite(
    data: FavoriteRequest,
    actor: TokenPayload = Depends(get_current_actor),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> MessageResponse:
    await favorite_service.add_favorite(actor, data.listing_id)
    return MessageResponse(message="Added to favorites successfully")


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Remove a listing from the caller's favorites",
)
async def remove_favorite(
    data: FavoriteRequest,
    actor: TokenPayload = Depends(get_current_actor),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> MessageResponse:
    await favorite_service.remove_favorite(actor, data.listing_id)
    return MessageResponse(message="Removed from favorites successfully")

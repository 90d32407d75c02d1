"""
Public user directory endpoints.
"""

from fastapi import APIRouter, Depends
from typing import List
import uuid
from app.services.user import UserService
from app.schemas.user import UserPublicResponse, UserActivityResponse
from app.schemas.error import ERROR_RESPONSES
from app.utils.dependencies import get_user_service


router = APIRouter(prefix="/users", tags=["Users"], responses=ERROR_RESPONSES)


@router.get("", response_model=List[UserPublicResponse], summary="List users")
async def list_users(user_service: UserService = Depends(get_user_service)) -> List[UserPublicResponse]:
    users = await user_service.list_users()
    return [UserPublicResponse.model_validate(user.to_public_dict()) for user in users]


@router.get("/role/{role}", response_model=List[UserPublicResponse], summary="List users by role")
async def list_users_by_role(
    role: str,
    user_service: UserService = Depends(get_user_service)
) -> List[UserPublicResponse]:
    users = await user_service.list_by_role(role)
    return [UserPublicResponse.model_validate(user.to_public_dict()) for user in users]


@router.get("/{user_id}", response_model=UserPublicResponse, summary="Get user")
async def get_user(
    user_id: uuid.UUID,
    user_service: UserService = Depends(get_user_service)
) -> UserPublicResponse:
    user = await user_service.get_user(user_id)
    return UserPublicResponse.model_validate(user.to_public_dict())


@router.get(
    "/{user_id}/activity",
    response_model=UserActivityResponse,
    summary="User activity report",
    description="Favorites, inquiries and owned properties of a user"
)
async def get_user_activity(
    user_id: uuid.UUID,
    user_service: UserService = Depends(get_user_service)
) -> UserActivityResponse:
    activity = await user_service.get_activity(user_id)
    return UserActivityResponse.model_validate(activity)

"""
Authentication API endpoints: registration, login, profile management and
admin user management.
"""

from fastapi import APIRouter, Depends, status
from typing import List
import uuid
from app.services.auth import AuthService
from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    ChangePasswordRequest,
    AuthResponse,
    MessageResponse
)
from app.schemas.user import (
    UserResponse,
    ProfileUpdateRequest,
    RoleUpdateRequest,
    StatusUpdateRequest,
    UserMessageResponse,
    DeletedUserResponse
)
from app.schemas.error import ERROR_RESPONSES
from app.utils.auth import TokenPayload
from app.utils.dependencies import get_auth_service, get_current_actor, require_admin


router = APIRouter(prefix="/auth", tags=["Authentication"], responses=ERROR_RESPONSES)


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    description="Create an account (default role: buyer) and return a signed token"
)
async def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    user, token = await auth_service.register(data)
    return AuthResponse(
        message="Registration successful",
        token=token,
        user=UserResponse.model_validate(user.to_dict())
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="User login",
    description="Authenticate with email and password and return a signed token"
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """
    Raises:
        BadRequestError: If email or password is missing
        InvalidCredentialsError: If credentials are invalid
        InactiveUserError: If the account is deactivated
    """
    user, token = await auth_service.login(data)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user.to_dict())
    )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(
    actor: TokenPayload = Depends(get_current_actor),
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    user = await auth_service.get_current_user(actor)
    return UserResponse.model_validate(user.to_dict())


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="User logout",
    description="Tokens are stateless; the client is expected to discard its token"
)
async def logout(actor: TokenPayload = Depends(get_current_actor)) -> MessageResponse:
    return MessageResponse(message="Logout successful")


@router.put(
    "/profile",
    response_model=UserMessageResponse,
    summary="Update own profile",
)
async def update_profile(
    data: ProfileUpdateRequest,
    actor: TokenPayload = Depends(get_current_actor),
    auth_service: AuthService = Depends(get_auth_service)
) -> UserMessageResponse:
    user = await auth_service.update_profile(actor, data)
    return UserMessageResponse(
        message="Profile updated successfully",
        user=UserResponse.model_validate(user.to_dict())
    )


@router.put(
    "/change-password",
    response_model=MessageResponse,
    summary="Change own password",
)
async def change_password(
    data: ChangePasswordRequest,
    actor: TokenPayload = Depends(get_current_actor),
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    await auth_service.change_password(actor, data)
    return MessageResponse(message="Password changed successfully")


# Admin user management

@router.get(
    "/admin/users",
    response_model=List[UserResponse],
    summary="List all users (admin)",
)
async def admin_list_users(
    actor: TokenPayload = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service)
) -> List[UserResponse]:
    users = await auth_service.list_users()
    return [UserResponse.model_validate(user.to_dict()) for user in users]


@router.put(
    "/admin/users/{user_id}/role",
    response_model=UserMessageResponse,
    summary="Change a user's role (admin)",
)
async def admin_update_role(
    user_id: uuid.UUID,
    data: RoleUpdateRequest,
    actor: TokenPayload = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service)
) -> UserMessageResponse:
    user = await auth_service.update_role(user_id, data.role)
    return UserMessageResponse(
        message="User role updated successfully",
        user=UserResponse.model_validate(user.to_dict())
    )


@router.put(
    "/admin/users/{user_id}/status",
    response_model=UserMessageResponse,
    summary="Activate or deactivate a user (admin)",
)
async def admin_update_status(
    user_id: uuid.UUID,
    data: StatusUpdateRequest,
    actor: TokenPayload = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service)
) -> UserMessageResponse:
    user = await auth_service.update_status(user_id, data.is_active)
    state = "activated" if user.is_active else "deactivated"
    return UserMessageResponse(
        message=f"User {state} successfully",
        user=UserResponse.model_validate(user.to_dict())
    )


@router.delete(
    "/admin/users/{user_id}",
    response_model=DeletedUserResponse,
    summary="Delete a user (admin)",
    description="Hard-deletes the user and everything they own; returns the pre-delete snapshot"
)
async def admin_delete_user(
    user_id: uuid.UUID,
    actor: TokenPayload = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service)
) -> DeletedUserResponse:
    snapshot = await auth_service.delete_user(actor, user_id)
    return DeletedUserResponse(
        message="User deleted successfully",
        deleted_user=UserResponse.model_validate(snapshot)
    )

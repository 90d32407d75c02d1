"""
FastAPI dependency injection utilities for authentication and database sessions.
Provides service providers, the authentication guard and role checks.
"""

from typing import Optional, Sequence
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.database import get_db
from app.models.user import UserRole
from app.services.auth import AuthService
from app.services.property import PropertyService
from app.services.listing import ListingService
from app.services.favorite import FavoriteService
from app.services.inquiry import InquiryService
from app.services.search import SearchService
from app.services.user import UserService
from app.utils.auth import TokenPayload, verify_token
from app.utils.exceptions import (
    UnauthorizedError,
    InvalidTokenError,
    InsufficientPermissionsError
)
from jose import JWTError
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme; a missing header falls back to the cookie
security = HTTPBearer(auto_error=False)


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    return PropertyService(db)


async def get_listing_service(db: AsyncSession = Depends(get_db)) -> ListingService:
    return ListingService(db)


async def get_favorite_service(db: AsyncSession = Depends(get_db)) -> FavoriteService:
    return FavoriteService(db)


async def get_inquiry_service(db: AsyncSession = Depends(get_db)) -> InquiryService:
    return InquiryService(db)


async def get_search_service(db: AsyncSession = Depends(get_db)) -> SearchService:
    return SearchService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_current_actor(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """
    Authentication guard.

    Reads the token from the Authorization header or, failing that, from the
    auth cookie and verifies it. No database lookup is made: the identity and
    role are taken from the token claims.

    Raises:
        UnauthorizedError: If no token is provided
        InvalidTokenError: If the token fails verification for any reason
    """
    token = credentials.credentials if credentials else request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise UnauthorizedError("No token provided")

    try:
        return verify_token(token)
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        raise InvalidTokenError()


class RoleChecker:
    """
    Role guard, applied after authentication.

    Usage:
        @router.post("/", dependencies=[Depends(RoleChecker([UserRole.ADMIN]))])
    """

    def __init__(self, allowed_roles: Sequence[UserRole]):
        self.allowed_roles = {role.value for role in allowed_roles}

    def __call__(self, actor: TokenPayload = Depends(get_current_actor)) -> TokenPayload:
        if actor.role not in self.allowed_roles:
            logger.info(f"User {actor.user_id} with role {actor.role} denied; needs one of {sorted(self.allowed_roles)}")
            raise InsufficientPermissionsError()
        return actor


require_admin = RoleChecker([UserRole.ADMIN])
require_seller_or_admin = RoleChecker([UserRole.SELLER, UserRole.ADMIN])
require_property_manager = RoleChecker([UserRole.SELLER, UserRole.AGENT, UserRole.ADMIN])

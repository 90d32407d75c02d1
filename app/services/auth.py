"""
Authentication service for registration, login, profile management and the
admin user-management operations.
"""

from typing import Tuple, List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.repositories.user import UserRepository
from app.models.user import User, UserRole
from app.schemas.auth import RegisterRequest, LoginRequest, ChangePasswordRequest
from app.schemas.user import ProfileUpdateRequest
from app.utils.auth import create_access_token, TokenPayload
from app.utils.exceptions import (
    BadRequestError,
    ForbiddenError,
    InvalidCredentialsError,
    InactiveUserError,
    InvalidRoleError,
    CannotDeleteSelfError,
    NotFoundError,
    PasswordPolicyError,
    UnauthorizedError,
)
import uuid
import logging

logger = logging.getLogger(__name__)


def parse_role(value: str) -> UserRole:
    """
    Convert a raw role string into a UserRole.

    Raises:
        InvalidRoleError: If the value is not one of the known roles
    """
    try:
        return UserRole(value)
    except ValueError:
        raise InvalidRoleError()


class AuthService:
    """
    Authentication service managing the credential store and token issuance.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value
        )

    def _check_password_policy(self, password: str, message: str) -> None:
        if len(password) < settings.min_password_length:
            raise PasswordPolicyError(message)

    async def register(self, data: RegisterRequest) -> Tuple[User, str]:
        """
        Create an account and sign the caller in.

        Returns:
            Tuple of (user, token)

        Raises:
            BadRequestError: If name, email or password is missing
            PasswordPolicyError: If the password is too short
            InvalidRoleError: If the requested role is unknown
            DuplicateEmailError: If the email is already registered
        """
        if not data.name or not data.email or not data.password:
            raise BadRequestError("Name, email, and password are required")

        self._check_password_policy(
            data.password,
            f"Password must be at least {settings.min_password_length} characters"
        )

        role = parse_role(data.role) if data.role else UserRole.BUYER
        if role == UserRole.ADMIN and not settings.allow_admin_self_registration:
            logger.warning(f"Refused admin self-registration for {data.email}")
            raise ForbiddenError("Admin accounts cannot be self-registered")

        user = await self.user_repo.create_user({
            "name": data.name,
            "email": data.email,
            "password": data.password,
            "phone": data.phone,
            "address": data.address,
            "role": role,
        })

        logger.info(f"User registered: {user.id} ({role.value})")
        return user, self.issue_token(user)

    async def login(self, data: LoginRequest) -> Tuple[User, str]:
        """
        Authenticate by email and password.

        Unknown email and wrong password produce the same error. The active
        flag is only consulted once the password is known to be correct.

        Raises:
            BadRequestError: If email or password is missing
            InvalidCredentialsError: If the credentials do not match
            InactiveUserError: If the account is deactivated
        """
        if not data.email or not data.password:
            raise BadRequestError("Email and password are required")

        user = await self.user_repo.verify_credentials(data.email, data.password)
        if user is None:
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        if not user.is_active:
            logger.warning(f"Login refused for deactivated user {user.id}")
            raise InactiveUserError()

        logger.info(f"User logged in: {user.id}")
        return user, self.issue_token(user)

    async def get_current_user(self, actor: TokenPayload) -> User:
        user = await self.user_repo.get_by_id(actor.user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    async def update_profile(self, actor: TokenPayload, data: ProfileUpdateRequest) -> User:
        """Apply the fields present in the request to the caller's profile."""
        user = await self.get_current_user(actor)
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return user
        return await self.user_repo.update_profile(user, changes)

    async def change_password(self, actor: TokenPayload, data: ChangePasswordRequest) -> None:
        """
        Replace the caller's password after verifying the current one.

        Raises:
            BadRequestError: If either password is missing
            PasswordPolicyError: If the new password is too short
            NotFoundError: If the user no longer exists
            UnauthorizedError: If the current password is wrong
        """
        if not data.current_password or not data.new_password:
            raise BadRequestError("Current and new passwords are required")

        self._check_password_policy(
            data.new_password,
            f"New password must be at least {settings.min_password_length} characters"
        )

        user = await self.get_current_user(actor)
        if not user.verify_password(data.current_password):
            logger.warning(f"Password change refused for user {user.id}: wrong current password")
            raise UnauthorizedError("Current password is incorrect")

        await self.user_repo.update_password(user, data.new_password)

    # Admin operations

    async def list_users(self) -> List[User]:
        return await self.user_repo.list_all()

    async def update_role(self, user_id: uuid.UUID, role: str) -> User:
        new_role = parse_role(role) if role else None
        if new_role is None:
            raise InvalidRoleError()

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")

        return await self.user_repo.update_role(user, new_role)

    async def update_status(self, user_id: uuid.UUID, is_active: bool) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")

        return await self.user_repo.update_status(user, is_active)

    async def delete_user(self, actor: TokenPayload, user_id: uuid.UUID) -> Dict[str, Any]:
        """
        Hard-delete another user.

        Returns:
            Snapshot of the user as it was before deletion

        Raises:
            CannotDeleteSelfError: If the admin targets their own account
            NotFoundError: If the user does not exist
        """
        if user_id == actor.user_id:
            raise CannotDeleteSelfError()

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")

        snapshot = user.to_dict()
        await self.user_repo.delete_user(user_id)
        logger.info(f"Admin {actor.user_id} deleted user {user_id}")
        return snapshot

"""
User repository for authentication and user management operations.
Backs the credential store: account creation, credential checks and the
admin mutations on role, status and existence.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from app.repositories.base import BaseRepository
from app.models.user import User, UserRole
from app.utils.auth import hash_password
from app.utils.exceptions import DuplicateEmailError
from typing import Optional, List, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """
    Repository for user management with authentication support.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user, hashing the plain password.

        Args:
            user_data: Must include name, email, password.
                       Optional: phone, address, role (defaults to buyer)

        Returns:
            Created user instance

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        data = dict(user_data)
        email = normalize_email(data.pop("email"))

        if await self.get_by_email(email):
            logger.info(f"Registration rejected, email already in use: {email}")
            raise DuplicateEmailError()

        password = data.pop("password")
        create_data = {
            **data,
            "email": email,
            "hashed_password": hash_password(password),
            "role": data.get("role") or UserRole.BUYER,
            "is_active": data.get("is_active", True),
        }

        user = await self.create(create_data)
        logger.info(f"Created user: {user.email} (ID: {user.id})")
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)."""
        try:
            query = select(User).where(User.email == normalize_email(email))
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def verify_credentials(self, email: str, password: str) -> Optional[User]:
        """
        Check an email/password pair.

        Returns:
            The user when the password matches, None for an unknown email or
            a wrong password. The active flag is not checked here.
        """
        user = await self.get_by_email(email)
        if user is None:
            logger.debug("Credential check failed: unknown email")
            return None

        if not user.verify_password(password):
            logger.debug(f"Credential check failed: wrong password for user {user.id}")
            return None

        return user

    async def update_password(self, user: User, new_password: str) -> User:
        updated = await self.update(user, {"hashed_password": hash_password(new_password)})
        logger.info(f"Password updated for user: {updated.id}")
        return updated

    async def update_profile(self, user: User, changes: Dict[str, Any]) -> User:
        updated = await self.update(user, changes)
        logger.info(f"Profile updated for user: {updated.id}")
        return updated

    async def update_role(self, user: User, role: UserRole) -> User:
        updated = await self.update(user, {"role": role})
        logger.info(f"User {updated.id} role updated to {role.value}")
        return updated

    async def update_status(self, user: User, is_active: bool) -> User:
        updated = await self.update(user, {"is_active": is_active})
        logger.info(f"User {updated.id} {'activated' if is_active else 'deactivated'}")
        return updated

    async def list_all(self) -> List[User]:
        """All users, newest first."""
        result = await self.db.execute(select(User).order_by(desc(User.created_at)))
        return list(result.scalars().all())

    async def list_by_role(self, role: UserRole) -> List[User]:
        result = await self.db.execute(
            select(User).where(User.role == role).order_by(desc(User.created_at))
        )
        return list(result.scalars().all())

    async def delete_user(self, user_id: uuid.UUID) -> bool:
        """Hard-delete a user; owned rows are cascaded by the database."""
        deleted = await self.delete(user_id)
        if deleted:
            logger.info(f"Deleted user: {user_id}")
        return deleted

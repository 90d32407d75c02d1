"""
Property and location service.
Properties are the unit of ownership from which listing rights derive.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.property import PropertyRepository, LocationRepository
from app.repositories.user import UserRepository
from app.models.property import Property, Location
from app.schemas.property import PropertyCreateRequest, PropertyUpdateRequest, LocationCreateRequest
from app.utils.auth import TokenPayload
from app.utils.exceptions import NotFoundError, NoFieldsToUpdateError
from app.utils.permissions import Action, ensure_can_act
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """Service for properties and locations."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.location_repo = LocationRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def create_property(self, actor: TokenPayload, data: PropertyCreateRequest) -> Property:
        """
        Create a property owned by the caller.

        Raises:
            NotFoundError: If the caller's account no longer exists
        """
        if not await self.user_repo.exists(actor.user_id):
            raise NotFoundError("User")

        prop = await self.property_repo.create_property({
            "owner_id": actor.user_id,
            "type": data.type,
            "description": data.description,
        })
        return await self.get_property(prop.id)

    async def get_property(self, property_id: uuid.UUID) -> Property:
        prop = await self.property_repo.get_by_id(property_id, refresh=True)
        if prop is None:
            raise NotFoundError("Property")
        return prop

    async def list_own_properties(self, actor: TokenPayload) -> List[Property]:
        return await self.property_repo.get_by_owner(actor.user_id)

    async def update_property(
        self,
        actor: TokenPayload,
        property_id: uuid.UUID,
        data: PropertyUpdateRequest
    ) -> Property:
        """
        Update a property's type or description.

        Raises:
            NotFoundError: If the property does not exist
            ForbiddenError: If the caller neither owns it nor is an admin
            NoFieldsToUpdateError: If the request carries no fields
        """
        prop = await self.get_property(property_id)
        ensure_can_act(
            actor, Action.UPDATE, prop.owner_id,
            detail="You can only edit your own properties"
        )

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise NoFieldsToUpdateError()

        await self.property_repo.update(prop, changes)
        logger.info(f"User {actor.user_id} updated property {property_id}")
        return await self.get_property(property_id)

    async def list_locations(self) -> List[Location]:
        return await self.location_repo.list_all()

    async def create_location(self, data: LocationCreateRequest) -> Location:
        location = await self.location_repo.create(data.model_dump())
        logger.info(f"Created location {location.id} in {location.city}")
        return location

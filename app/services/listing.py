"""
Listing service.
Every mutation resolves the listing's owner through its property and asks the
access policy whether the caller may act on it.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.listing import ListingRepository, ListingRow
from app.repositories.property import PropertyRepository, LocationRepository
from app.models.listing import Listing, ListingStatus
from app.models.image import PropertyImage
from app.models.user import UserRole
from app.schemas.listing import ListingCreateRequest, ListingUpdateRequest, ImageCreateRequest
from app.utils.auth import TokenPayload
from app.utils.exceptions import (
    BadRequestError,
    ListingNotFoundError,
    NotFoundError,
    NoFieldsToUpdateError,
)
from app.utils.permissions import Action, ensure_can_act
import uuid
import logging

logger = logging.getLogger(__name__)


class ListingService:
    """Service for listing reads, mutations and images."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.listing_repo = ListingRepository(db_session)
        self.property_repo = PropertyRepository(db_session)
        self.location_repo = LocationRepository(db_session)

    async def list_listings(self) -> List[ListingRow]:
        return await self.listing_repo.list_all()

    async def get_listing(self, listing_id: uuid.UUID) -> ListingRow:
        row = await self.listing_repo.get_row(listing_id)
        if row is None:
            raise ListingNotFoundError()
        return row

    async def list_by_status(self, status: ListingStatus) -> List[ListingRow]:
        return await self.listing_repo.list_by_status(status)

    async def list_by_city(self, city: str) -> List[ListingRow]:
        return await self.listing_repo.list_by_city(city)

    async def list_for_dashboard(self, actor: TokenPayload) -> List[ListingRow]:
        """Admins see every listing; sellers see the listings of their own properties."""
        if actor.role == UserRole.ADMIN.value:
            return await self.listing_repo.list_all()
        return await self.listing_repo.list_by_owner(actor.user_id)

    async def create_listing(self, actor: TokenPayload, data: ListingCreateRequest) -> Listing:
        """
        Offer a property for sale.

        Raises:
            BadRequestError: If property_id, location_id or price is missing
            ForbiddenError: If a seller references a property they do not own
            NotFoundError: If the property or location does not exist
        """
        if data.property_id is None or data.location_id is None or data.price is None:
            raise BadRequestError("property_id, location_id, and price are required")

        owner_id = await self.property_repo.get_owner_id(data.property_id)
        ensure_can_act(
            actor, Action.CREATE, owner_id,
            detail="You can only list your own properties"
        )
        if owner_id is None:
            raise NotFoundError("Property")

        if not await self.location_repo.exists(data.location_id):
            raise NotFoundError("Location")

        listing = await self.listing_repo.create_listing({
            "property_id": data.property_id,
            "location_id": data.location_id,
            "price": data.price,
            "status": data.status or ListingStatus.ACTIVE,
        })
        logger.info(f"User {actor.user_id} created listing {listing.id}")
        return listing

    async def _authorize(self, actor: TokenPayload, listing_id: uuid.UUID, action: Action, detail: str) -> None:
        exists, owner_id = await self.listing_repo.get_owner_id(listing_id)
        if not exists:
            raise ListingNotFoundError()
        ensure_can_act(actor, action, owner_id, detail=detail)

    async def update_listing(
        self,
        actor: TokenPayload,
        listing_id: uuid.UUID,
        data: ListingUpdateRequest
    ) -> Listing:
        """
        Change a listing's price and/or status.

        Raises:
            ListingNotFoundError: If the listing does not exist
            ForbiddenError: If a seller does not own the listing
            NoFieldsToUpdateError: If neither price nor status is given
        """
        await self._authorize(
            actor, listing_id, Action.UPDATE, "You can only edit your own listings"
        )

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise NoFieldsToUpdateError()

        listing = await self.listing_repo.update_listing(listing_id, changes)
        if listing is None:
            raise ListingNotFoundError()

        logger.info(f"User {actor.user_id} updated listing {listing_id}: {sorted(changes)}")
        return listing

    async def delete_listing(self, actor: TokenPayload, listing_id: uuid.UUID) -> None:
        await self._authorize(
            actor, listing_id, Action.DELETE, "You can only delete your own listings"
        )

        if not await self.listing_repo.delete(listing_id):
            raise ListingNotFoundError()
        logger.info(f"User {actor.user_id} deleted listing {listing_id}")

    async def get_images(self, listing_id: uuid.UUID) -> List[PropertyImage]:
        if not await self.listing_repo.exists(listing_id):
            raise ListingNotFoundError()
        return await self.listing_repo.get_images(listing_id)

    async def add_image(
        self,
        actor: TokenPayload,
        listing_id: uuid.UUID,
        data: ImageCreateRequest
    ) -> PropertyImage:
        await self._authorize(
            actor, listing_id, Action.UPDATE, "You can only edit your own listings"
        )
        return await self.listing_repo.add_image(listing_id, data.image_url)

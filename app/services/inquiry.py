"""
Inquiry service.
"""

from typing import List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.inquiry import InquiryRepository
from app.repositories.listing import ListingRepository
from app.repositories.user import UserRepository
from app.models.inquiry import Inquiry
from app.models.listing import ListingStatus
from app.schemas.inquiry import InquiryCreateRequest
from app.utils.auth import TokenPayload
from app.utils.exceptions import BadRequestError, NotFoundError, ListingNotFoundError, ListingNotActiveError
import uuid
import logging

logger = logging.getLogger(__name__)


class InquiryService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.inquiry_repo = InquiryRepository(db_session)
        self.listing_repo = ListingRepository(db_session)
        self.user_repo = UserRepository(db_session)

    async def create_inquiry(self, actor: TokenPayload, data: InquiryCreateRequest) -> Inquiry:
        """
        Send a message about a listing. Any authenticated user may inquire.

        Raises:
            BadRequestError: If listing_id or message is missing
            NotFoundError: If the caller's account no longer exists
            ListingNotFoundError: If the listing does not exist
            ListingNotActiveError: If the listing is not active
        """
        if data.listing_id is None or not data.message or not data.message.strip():
            raise BadRequestError("Missing required fields")

        if not await self.user_repo.exists(actor.user_id):
            raise NotFoundError("User")

        status = await self.listing_repo.get_status(data.listing_id)
        if status is None:
            raise ListingNotFoundError()
        if status != ListingStatus.ACTIVE:
            raise ListingNotActiveError()

        return await self.inquiry_repo.create_inquiry(
            actor.user_id, data.listing_id, data.message.strip()
        )

    async def list_for_listing(self, listing_id: uuid.UUID) -> List[Dict[str, Any]]:
        inquiries = await self.inquiry_repo.list_for_listing(listing_id)
        return [
            {
                "id": inquiry.id,
                "message": inquiry.message,
                "created_at": inquiry.created_at,
                "user_name": inquiry.user.name if inquiry.user else None,
                "user_email": inquiry.user.email if inquiry.user else None,
            }
            for inquiry in inquiries
        ]

    async def list_for_user(self, user_id: uuid.UUID) -> List[Dict[str, Any]]:
        inquiries = await self.inquiry_repo.list_for_user(user_id)
        results = []
        for inquiry in inquiries:
            listing = inquiry.listing
            results.append({
                "id": inquiry.id,
                "message": inquiry.message,
                "created_at": inquiry.created_at,
                "listing_id": inquiry.listing_id,
                "property_type": listing.listed_property.type if listing and listing.listed_property else None,
                "city": listing.location.city if listing and listing.location else None,
                "price": float(listing.price) if listing else None,
            })
        return results

"""
Inquiry repository. Inquiries are created and read, never updated.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from app.repositories.base import BaseRepository
from app.models.inquiry import Inquiry
from typing import List
import uuid
import logging

logger = logging.getLogger(__name__)


class InquiryRepository(BaseRepository[Inquiry]):

    def __init__(self, db: AsyncSession):
        super().__init__(Inquiry, db)

    async def create_inquiry(self, user_id: uuid.UUID, listing_id: uuid.UUID, message: str) -> Inquiry:
        inquiry = await self.create({
            "user_id": user_id,
            "listing_id": listing_id,
            "message": message,
        })
        logger.info(f"User {user_id} sent inquiry {inquiry.id} about listing {listing_id}")
        return inquiry

    async def list_for_listing(self, listing_id: uuid.UUID) -> List[Inquiry]:
        result = await self.db.execute(
            select(Inquiry)
            .where(Inquiry.listing_id == listing_id)
            .order_by(desc(Inquiry.created_at))
        )
        return list(result.scalars().all())

    async def list_for_user(self, user_id: uuid.UUID) -> List[Inquiry]:
        result = await self.db.execute(
            select(Inquiry)
            .where(Inquiry.user_id == user_id)
            .order_by(desc(Inquiry.created_at))
        )
        return list(result.scalars().all())

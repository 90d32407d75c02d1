"""
PropertyImage model.
Images belong to a listing; the earliest image is treated as the primary one.
"""

from sqlalchemy import String, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.listing import Listing


class PropertyImage(Base):
    """Image URL attached to a listing."""

    __tablename__ = "property_images"

    listing_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("listings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the listing this image belongs to"
    )

    image_url: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Public URL of the image"
    )

    listing: Mapped["Listing"] = relationship("Listing", back_populates="images")

    def __repr__(self) -> str:
        return f"<PropertyImage(id={self.id}, listing_id={self.listing_id})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "listing_id": self.listing_id,
            "image_url": self.image_url,
            "created_at": self.created_at,
        }

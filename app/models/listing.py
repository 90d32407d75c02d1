"""
Listing model.
A listing offers a property at a location for a price. Ownership is not stored
on the listing itself; it is derived through the referenced property.
"""

from sqlalchemy import Numeric, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from decimal import Decimal
import enum
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property, Location
    from app.models.image import PropertyImage


class ListingStatus(str, enum.Enum):
    """Lifecycle status of a listing."""
    ACTIVE = "active"
    PENDING = "pending"
    SOLD = "sold"
    INACTIVE = "inactive"

    @classmethod
    def values(cls) -> list:
        return [status.value for status in cls]


class Listing(Base):
    """Priced offer of a property at a location."""

    __tablename__ = "listings"

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("locations.id"),
        nullable=False,
        index=True
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        index=True,
        comment="Asking price"
    )

    status: Mapped[ListingStatus] = mapped_column(
        SQLEnum(
            ListingStatus,
            name="listing_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls]
        ),
        nullable=False,
        default=ListingStatus.ACTIVE,
        index=True
    )

    listed_property: Mapped["Property"] = relationship("Property", lazy="selectin")

    location: Mapped["Location"] = relationship("Location", lazy="selectin")

    images: Mapped[List["PropertyImage"]] = relationship(
        "PropertyImage",
        back_populates="listing",
        lazy="selectin",
        order_by="PropertyImage.created_at",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Listing(id={self.id}, price={self.price}, status={self.status})>"

    @property
    def owner_id(self) -> Optional[uuid.UUID]:
        """Owner of the listing, resolved through its property."""
        return self.listed_property.owner_id if self.listed_property else None

    @property
    def primary_image_url(self) -> Optional[str]:
        return self.images[0].image_url if self.images else None

    def to_dict(self) -> dict:
        """Denormalized listing view used by list endpoints."""
        prop = self.listed_property
        location = self.location
        return {
            "id": self.id,
            "price": float(self.price),
            "status": self.status.value,
            "created_at": self.created_at,
            "property_type": prop.type if prop else None,
            "description": prop.description if prop else None,
            "city": location.city if location else None,
            "area": location.area if location else None,
            "address": location.address if location else None,
            "owner_name": prop.owner.name if prop and prop.owner else None,
            "image_count": len(self.images),
            "image_url": self.primary_image_url,
        }

    def to_detail_dict(self) -> dict:
        """Full listing view including owner contact and every image."""
        data = self.to_dict()
        prop = self.listed_property
        owner = prop.owner if prop else None
        data.update({
            "property_id": self.property_id,
            "location_id": self.location_id,
            "updated_at": self.updated_at,
            "owner_id": owner.id if owner else None,
            "owner_email": owner.email if owner else None,
            "images": [image.to_dict() for image in self.images],
        })
        return data

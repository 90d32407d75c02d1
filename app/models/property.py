"""
Property and Location models.
A property is owned by exactly one user; a location is a flat address record
referenced by listings.
"""

from sqlalchemy import String, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User


class Property(Base):
    """Physical property owned by a seller, agent or admin."""

    __tablename__ = "properties"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this property"
    )

    type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="Property type, e.g. house, apartment, land"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Free-form property description"
    )

    owner: Mapped["User"] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, type={self.type}, owner_id={self.owner_id})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "owner_name": self.owner.name if self.owner else None,
            "type": self.type,
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class Location(Base):
    """Denormalized address record."""

    __tablename__ = "locations"

    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    area: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, city={self.city})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "city": self.city,
            "area": self.area,
            "address": self.address,
        }

"""
Inquiry model. Inquiries are append-only messages from a user about a listing.
"""

from sqlalchemy import Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User
    from app.models.listing import Listing


class Inquiry(Base):
    """Message sent by a user to the owner of a listing."""

    __tablename__ = "inquiries"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    listing_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("listings.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    message: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped["User"] = relationship("User", lazy="selectin")

    listing: Mapped["Listing"] = relationship("Listing", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Inquiry(id={self.id}, listing_id={self.listing_id})>"

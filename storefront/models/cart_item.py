"""Cart item SQLAlchemy ORM model."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, utcnow


class CartItem(Base):
    """A game staged for purchase by a user.

    Rows are created on add-to-cart and deleted on remove, clear or
    successful checkout; they are never updated.

    Attributes:
        id: Unique identifier (UUID)
        user_id: Foreign key to the owning User
        game_id: Foreign key to the staged Game
        added_at: Time the game was staged
    """

    __tablename__ = "cart_items"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    game_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("user_id", "game_id", name="uq_cart_items_user_id_game_id"),
    )

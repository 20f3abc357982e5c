"""Purchase record (ownership) SQLAlchemy ORM model."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, utcnow


class PurchaseRecord(Base):
    """Authoritative "user owns game" fact, created only by a purchase.

    Attributes:
        id: Unique identifier (UUID)
        user_id: Foreign key to the buyer
        game_id: Foreign key to the purchased Game
        purchase_price: Price paid at purchase time, NUMERIC(10,2)
        purchased_at: Purchase timestamp
    """

    __tablename__ = "purchase_records"

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
        ForeignKey("games.id"),
        nullable=False,
        index=True
    )
    purchase_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False
    )
    purchased_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("user_id", "game_id", name="uq_purchase_records_user_id_game_id"),
    )

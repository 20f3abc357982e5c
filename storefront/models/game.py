"""Game catalog SQLAlchemy ORM model."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, utcnow


class Game(Base):
    """Catalog item that can be staged in a cart and purchased.

    Catalog CRUD lives outside the commerce core; purchases read the
    current price and author from here.

    Attributes:
        id: Unique identifier (UUID)
        title: Display title (unique)
        price: Current price with NUMERIC(10,2) precision
        author_id: Foreign key to the developer who published the game
        created_at: Record creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "games"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00")
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_games_price_non_negative"),
    )

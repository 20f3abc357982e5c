"""Balance SQLAlchemy ORM model."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Numeric, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, utcnow


class Balance(Base):
    """Per-user monetary balance with two-place precision.

    Only the balance ledger mutates ``amount``; every mutation is paired
    with a BalanceTransaction row in the same unit of work.

    Attributes:
        id: Unique identifier (UUID)
        user_id: Foreign key to User (unique, one balance per user)
        amount: Current balance, NUMERIC(10,2), never negative
        created_at: Record creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "balances"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00")
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
        CheckConstraint("amount >= 0", name="ck_balances_amount_non_negative"),
    )

    def has_sufficient_funds(self, amount: Decimal) -> bool:
        return self.amount >= amount

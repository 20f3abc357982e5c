"""Balance transaction (ledger entry) SQLAlchemy ORM model."""

import enum
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Numeric, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, utcnow


class OperationType(str, enum.Enum):
    """Kind of balance mutation recorded in the ledger.

    Values:
        DEPOSIT: User added funds
        WITHDRAWAL: User removed funds
        PURCHASE: Funds debited for one or more games
        ADMIN_DEPOSIT: Funds credited by an administrator
    """

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    PURCHASE = "PURCHASE"
    ADMIN_DEPOSIT = "ADMIN_DEPOSIT"

    @property
    def is_credit(self) -> bool:
        return self in (OperationType.DEPOSIT, OperationType.ADMIN_DEPOSIT)


class BalanceTransaction(Base):
    """Immutable, append-only record of a balance mutation.

    Attributes:
        id: Unique identifier (UUID)
        balance_id: Foreign key to the owning Balance
        operation: Operation kind (DEPOSIT, WITHDRAWAL, PURCHASE, ADMIN_DEPOSIT)
        amount: Positive amount moved, NUMERIC(10,2)
        balance_before: Balance amount before the mutation
        balance_after: Balance amount after the mutation
        created_at: Entry timestamp (microsecond precision, set client-side)
    """

    __tablename__ = "balance_transactions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    balance_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("balances.id", ondelete="CASCADE"),
        nullable=False
    )
    operation: Mapped[OperationType] = mapped_column(
        String(20),
        nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False
    )
    balance_before: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False
    )
    balance_after: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_balance_transactions_amount_positive"),
        Index("ix_balance_transactions_balance_id_created_at", "balance_id", "created_at"),
    )

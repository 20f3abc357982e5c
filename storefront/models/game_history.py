"""Game history (audit entry) SQLAlchemy ORM model."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base, utcnow


class HistoryAction(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    PURCHASE = "PURCHASE"


class GameHistory(Base):
    """Human-readable history entry written by the audit recorder.

    Attributes:
        id: Unique identifier (UUID)
        game_id: Game the entry is about
        action: CREATE, UPDATE, DELETE or PURCHASE
        field_changed: Field name for UPDATE entries
        old_value: Value before the change
        new_value: Value after the change
        changed_by: Acting user
        changed_at: Entry timestamp
        description: Free-text summary
    """

    __tablename__ = "game_history"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4
    )
    game_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    action: Mapped[HistoryAction] = mapped_column(
        String(20),
        nullable=False
    )
    field_changed: Mapped[str | None] = mapped_column(String(100))
    old_value: Mapped[str | None] = mapped_column(String(2000))
    new_value: Mapped[str | None] = mapped_column(String(2000))
    changed_by: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False
    )
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now()
    )
    description: Mapped[str | None] = mapped_column(String(500))

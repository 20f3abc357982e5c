"""Purchase Pydantic schemas for request/response validation."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer


class PurchaseRequest(BaseModel):
    """Request schema for a batch purchase."""

    game_ids: list[uuid.UUID] = Field(..., description="Games to purchase together")


class PurchaseReceipt(BaseModel):
    """Structured success result of a purchase, one per game.

    ``price_difference`` is the current catalog price minus the price
    paid; it is informational only.
    """

    purchase_id: uuid.UUID
    game_id: uuid.UUID
    game_title: str
    author_id: uuid.UUID
    purchase_price: Decimal
    current_price: Decimal
    price_difference: Decimal
    purchased_at: datetime

    @field_serializer("purchase_price", "current_price", "price_difference")
    def serialize_money(self, value: Decimal) -> str:
        return str(value)


class PurchaseEligibility(BaseModel):
    """Non-throwing eligibility check for a single game."""

    eligible: bool
    message: str
    game_id: uuid.UUID
    game_title: str | None = None
    game_price: Decimal | None = None
    user_balance: Decimal | None = None
    sufficient_funds: bool = False


class PurchaseStats(BaseModel):
    total_games_owned: int
    total_money_spent: Decimal
    average_price: Decimal
    first_purchase_at: datetime | None = None
    last_purchase_at: datetime | None = None

    @field_serializer("total_money_spent", "average_price")
    def serialize_money(self, value: Decimal) -> str:
        return str(value)


class RevenueRead(BaseModel):
    author_id: uuid.UUID
    total_revenue: Decimal
    sales_count: int

    @field_serializer("total_revenue")
    def serialize_money(self, value: Decimal) -> str:
        return str(value)

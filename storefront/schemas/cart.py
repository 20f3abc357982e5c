"""Cart Pydantic schemas for request/response validation."""

import enum
import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer


class CartOperationType(str, enum.Enum):
    ADD = "ADD"
    REMOVE = "REMOVE"
    CLEAR = "CLEAR"
    CHECKOUT = "CHECKOUT"


class AddToCartRequest(BaseModel):
    game_id: uuid.UUID = Field(..., description="Game to stage for purchase")


class CartItemRead(BaseModel):
    """A staged game joined with its current catalog data."""

    game_id: uuid.UUID
    title: str
    price: Decimal
    author_id: uuid.UUID
    added_at: datetime

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> str:
        return str(price)


class CartSummary(BaseModel):
    items: list[CartItemRead]
    total_items: int
    total_price: Decimal

    @field_serializer("total_price")
    def serialize_total(self, total_price: Decimal) -> str:
        return str(total_price)


class CartOperation(BaseModel):
    """Result of a cart mutation.

    ``cart_size`` is the number of staged items after the operation;
    ``items_processed`` and ``total_amount`` are set for clear and checkout,
    and ``game_titles`` lists the games a checkout actually charged for.
    """

    operation: CartOperationType
    message: str
    game_id: uuid.UUID | None = None
    game_title: str | None = None
    cart_size: int = 0
    items_processed: int = 0
    total_amount: Decimal | None = None
    game_titles: list[str] = Field(default_factory=list)

    @field_serializer("operation")
    def serialize_operation(self, operation: CartOperationType) -> str:
        return operation.value

    @field_serializer("total_amount")
    def serialize_total(self, total_amount: Decimal | None) -> str | None:
        return None if total_amount is None else str(total_amount)


class CartValidation(BaseModel):
    """Every reason a cart cannot be checked out, not just the first."""

    can_checkout: bool
    message: str
    issues: list[str]
    total_cost: Decimal
    user_balance: Decimal

    @field_serializer("total_cost", "user_balance")
    def serialize_money(self, value: Decimal) -> str:
        return str(value)

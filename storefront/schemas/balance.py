"""Balance and ledger Pydantic schemas for request/response validation."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from storefront.models.balance_transaction import OperationType


class AmountRequest(BaseModel):
    """Request schema for deposits and withdrawals."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"amount": "29.99"}}
    )

    amount: Decimal = Field(
        ...,
        gt=0,
        le=Decimal("999999.99"),
        decimal_places=2,
        description="Amount with at most 2 decimal places",
    )


class BalanceRead(BaseModel):
    """Schema for reading Balance data.

    Amount is serialized as a decimal string for precision.
    """

    model_config = ConfigDict(from_attributes=True)

    user_id: uuid.UUID
    amount: Decimal
    created_at: datetime
    updated_at: datetime

    @field_serializer("amount")
    def serialize_amount(self, amount: Decimal) -> str:
        """Serialize amount as decimal string to preserve precision."""
        return str(amount)


class BalanceTransactionRead(BaseModel):
    """Schema for reading a ledger entry."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    operation: OperationType
    amount: Decimal
    balance_before: Decimal
    balance_after: Decimal
    created_at: datetime

    @field_serializer("amount", "balance_before", "balance_after")
    def serialize_money(self, value: Decimal) -> str:
        return str(value)

    @field_serializer("operation")
    def serialize_operation(self, operation: OperationType) -> str:
        return OperationType(operation).value


class BalanceOperationRead(BaseModel):
    """Result of a deposit, withdrawal or admin deposit."""

    user_id: uuid.UUID
    balance: Decimal
    amount: Decimal
    operation: OperationType
    transaction_id: uuid.UUID

    @field_serializer("balance", "amount")
    def serialize_money(self, value: Decimal) -> str:
        return str(value)

    @field_serializer("operation")
    def serialize_operation(self, operation: OperationType) -> str:
        return OperationType(operation).value

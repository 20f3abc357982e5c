# Pydantic Data Transfer Objects

from storefront.schemas.balance import (
    AmountRequest,
    BalanceOperationRead,
    BalanceRead,
    BalanceTransactionRead,
)
from storefront.schemas.cart import (
    AddToCartRequest,
    CartItemRead,
    CartOperation,
    CartOperationType,
    CartSummary,
    CartValidation,
)
from storefront.schemas.purchase import (
    PurchaseEligibility,
    PurchaseReceipt,
    PurchaseRequest,
    PurchaseStats,
    RevenueRead,
)

__all__ = [
    "AddToCartRequest",
    "AmountRequest",
    "BalanceOperationRead",
    "BalanceRead",
    "BalanceTransactionRead",
    "CartItemRead",
    "CartOperation",
    "CartOperationType",
    "CartSummary",
    "CartValidation",
    "PurchaseEligibility",
    "PurchaseReceipt",
    "PurchaseRequest",
    "PurchaseStats",
    "RevenueRead",
]

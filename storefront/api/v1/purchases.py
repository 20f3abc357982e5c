"""Purchase API endpoints."""

import uuid
from decimal import Decimal

from fastapi import APIRouter

from storefront.api.deps import CurrentUser, Purchases
from storefront.core.money import total
from storefront.models.user import User
from storefront.schemas.purchase import (
    PurchaseEligibility,
    PurchaseReceipt,
    PurchaseRequest,
    PurchaseStats,
    RevenueRead,
)
from storefront.worker import export_purchase_audit, send_purchase_receipt_email

router = APIRouter(prefix="/purchases", tags=["purchases"])


def queue_purchase_notifications(user: User, receipts: list[PurchaseReceipt]) -> Decimal:
    """Queue receipt and audit tasks; call only after the purchase committed."""
    charged = total(receipt.purchase_price for receipt in receipts)
    send_purchase_receipt_email.delay(
        email=user.email,
        game_titles=[receipt.game_title for receipt in receipts],
        total=str(charged),
    )
    export_purchase_audit.delay(
        user_id=str(user.id),
        data={
            "purchase_ids": [str(receipt.purchase_id) for receipt in receipts],
            "game_ids": [str(receipt.game_id) for receipt in receipts],
            "total": str(charged),
            "purchased_at": receipts[0].purchased_at.isoformat(),
        },
    )
    return charged


@router.post("", response_model=list[PurchaseReceipt])
async def purchase_games(request: PurchaseRequest, user: CurrentUser, purchases: Purchases):
    """
    Purchase several games in one atomic batch.

    - **game_ids**: non-empty list of game UUIDs, no duplicates

    The balance is debited once for the total. Either every game is
    granted or nothing changes.
    """
    receipts = await purchases.purchase_batch(user.id, request.game_ids)
    queue_purchase_notifications(user, receipts)
    return receipts


@router.post("/can-purchase")
async def can_purchase(request: PurchaseRequest, user: CurrentUser, purchases: Purchases) -> dict:
    return {"can_purchase": await purchases.can_purchase_all(user.id, request.game_ids)}


@router.get("/history", response_model=list[PurchaseReceipt])
async def purchase_history(user: CurrentUser, purchases: Purchases):
    return await purchases.purchase_history(user.id)


@router.get("/stats", response_model=PurchaseStats)
async def purchase_stats(user: CurrentUser, purchases: Purchases):
    return await purchases.purchase_stats(user.id)


@router.get("/sales", response_model=list[PurchaseReceipt])
async def my_sales(user: CurrentUser, purchases: Purchases):
    """Purchases of games the caller published."""
    return await purchases.sales_for_author(user.id)


@router.get("/revenue", response_model=RevenueRead)
async def my_revenue(user: CurrentUser, purchases: Purchases):
    return await purchases.revenue_for_author(user.id)


@router.post("/{game_id}", response_model=PurchaseReceipt)
async def purchase_game(game_id: uuid.UUID, user: CurrentUser, purchases: Purchases):
    receipt = await purchases.purchase_single(user.id, game_id)
    queue_purchase_notifications(user, [receipt])
    return receipt


@router.get("/{game_id}/eligibility", response_model=PurchaseEligibility)
async def purchase_eligibility(game_id: uuid.UUID, user: CurrentUser, purchases: Purchases):
    return await purchases.check_eligibility(user.id, game_id)


@router.get("/games/{game_id}", response_model=list[PurchaseReceipt])
async def game_purchases(game_id: uuid.UUID, purchases: Purchases):
    return await purchases.game_purchases(game_id)

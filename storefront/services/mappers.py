"""Plain conversion functions between ORM rows and response shapes."""

import uuid
from collections.abc import Sequence
from decimal import Decimal

from storefront.core.money import ZERO, quantize, total
from storefront.models.balance import Balance
from storefront.models.balance_transaction import BalanceTransaction
from storefront.models.cart_item import CartItem
from storefront.models.game import Game
from storefront.models.purchase_record import PurchaseRecord
from storefront.schemas.balance import BalanceOperationRead
from storefront.schemas.cart import (
    CartItemRead,
    CartOperation,
    CartOperationType,
    CartSummary,
)
from storefront.schemas.purchase import PurchaseReceipt, PurchaseStats


def format_money(amount: Decimal | None, currency_symbol: str = "$") -> str:
    """Display formatting for the HTTP boundary, e.g. ``$29.99``."""
    return f"{currency_symbol}{quantize(amount if amount is not None else ZERO)}"


def new_purchase_record(user_id: uuid.UUID, game: Game) -> PurchaseRecord:
    return PurchaseRecord(
        id=uuid.uuid4(),
        user_id=user_id,
        game_id=game.id,
        purchase_price=quantize(game.price),
    )


def to_receipt(record: PurchaseRecord, game: Game) -> PurchaseReceipt:
    return PurchaseReceipt(
        purchase_id=record.id,
        game_id=game.id,
        game_title=game.title,
        author_id=game.author_id,
        purchase_price=record.purchase_price,
        current_price=game.price,
        price_difference=quantize(game.price - record.purchase_price),
        purchased_at=record.purchased_at,
    )


def to_operation_read(
    user_id: uuid.UUID,
    balance: Balance,
    transaction: BalanceTransaction,
) -> BalanceOperationRead:
    return BalanceOperationRead(
        user_id=user_id,
        balance=balance.amount,
        amount=transaction.amount,
        operation=transaction.operation,
        transaction_id=transaction.id,
    )


def to_cart_item(item: CartItem, game: Game) -> CartItemRead:
    return CartItemRead(
        game_id=game.id,
        title=game.title,
        price=game.price,
        author_id=game.author_id,
        added_at=item.added_at,
    )


def to_cart_summary(rows: Sequence[tuple[CartItem, Game]]) -> CartSummary:
    items = [to_cart_item(item, game) for item, game in rows]
    return CartSummary(
        items=items,
        total_items=len(items),
        total_price=total(item.price for item in items),
    )


def added_to_cart(game: Game, cart_size: int) -> CartOperation:
    return CartOperation(
        operation=CartOperationType.ADD,
        message="Game added to cart successfully",
        game_id=game.id,
        game_title=game.title,
        cart_size=cart_size,
    )


def removed_from_cart(game: Game, cart_size: int) -> CartOperation:
    return CartOperation(
        operation=CartOperationType.REMOVE,
        message="Game removed from cart successfully",
        game_id=game.id,
        game_title=game.title,
        cart_size=cart_size,
    )


def cart_cleared(items_removed: int) -> CartOperation:
    return CartOperation(
        operation=CartOperationType.CLEAR,
        message=f"Cart cleared successfully. {items_removed} items removed.",
        items_processed=items_removed,
    )


def checked_out(receipts: Sequence[PurchaseReceipt], total_amount: Decimal) -> CartOperation:
    items_processed = len(receipts)
    return CartOperation(
        operation=CartOperationType.CHECKOUT,
        message=(
            f"Checkout completed successfully. {items_processed} games purchased "
            "and added to your library."
        ),
        items_processed=items_processed,
        total_amount=total_amount,
        game_titles=[receipt.game_title for receipt in receipts],
    )


def to_purchase_stats(records: Sequence[PurchaseRecord]) -> PurchaseStats:
    if not records:
        return PurchaseStats(
            total_games_owned=0,
            total_money_spent=ZERO,
            average_price=ZERO,
        )
    spent = total(record.purchase_price for record in records)
    purchased = sorted(record.purchased_at for record in records)
    return PurchaseStats(
        total_games_owned=len(records),
        total_money_spent=spent,
        average_price=quantize(spent / len(records)),
        first_purchase_at=purchased[0],
        last_purchase_at=purchased[-1],
    )

"""Unit tests for API integration with Celery tasks.

Receipt and audit tasks are queued only after the purchase or checkout
committed; a failed purchase queues nothing.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from storefront.api.v1.cart import checkout
from storefront.api.v1.purchases import purchase_game, purchase_games
from storefront.core.exceptions import AlreadyOwnedError, InsufficientFundsError
from storefront.models import User
from storefront.schemas.cart import CartOperation, CartOperationType
from storefront.schemas.purchase import PurchaseReceipt, PurchaseRequest


def make_receipt(title: str, price: str) -> PurchaseReceipt:
    return PurchaseReceipt(
        purchase_id=uuid.uuid4(),
        game_id=uuid.uuid4(),
        game_title=title,
        author_id=uuid.uuid4(),
        purchase_price=Decimal(price),
        current_price=Decimal(price),
        price_difference=Decimal("0.00"),
        purchased_at=datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc),
    )


class TestPurchaseTaskQueuing:
    """Tests for purchase endpoint task queuing behavior."""

    @pytest.fixture
    def user(self) -> User:
        return User(id=uuid.uuid4(), username="buyer", email="buyer@example.com", is_active=True)

    @pytest.fixture
    def receipts(self) -> list[PurchaseReceipt]:
        return [make_receipt("Hollow Peaks", "29.99"), make_receipt("Night Shift", "39.99")]

    @pytest.mark.asyncio
    async def test_batch_purchase_queues_receipt_and_audit(
        self, user: User, receipts: list[PurchaseReceipt]
    ) -> None:
        purchases = MagicMock()
        purchases.purchase_batch = AsyncMock(return_value=receipts)
        request = PurchaseRequest(game_ids=[receipt.game_id for receipt in receipts])

        with patch(
            "storefront.api.v1.purchases.send_purchase_receipt_email"
        ) as mock_email_task, patch(
            "storefront.api.v1.purchases.export_purchase_audit"
        ) as mock_audit_task:
            result = await purchase_games(request, user, purchases)

        assert result == receipts
        mock_email_task.delay.assert_called_once_with(
            email="buyer@example.com",
            game_titles=["Hollow Peaks", "Night Shift"],
            total="69.98",
        )
        audit_kwargs = mock_audit_task.delay.call_args.kwargs
        assert audit_kwargs["user_id"] == str(user.id)
        assert audit_kwargs["data"]["total"] == "69.98"
        assert audit_kwargs["data"]["game_ids"] == [str(r.game_id) for r in receipts]

    @pytest.mark.asyncio
    async def test_single_purchase_queues_tasks(
        self, user: User, receipts: list[PurchaseReceipt]
    ) -> None:
        purchases = MagicMock()
        purchases.purchase_single = AsyncMock(return_value=receipts[0])

        with patch(
            "storefront.api.v1.purchases.send_purchase_receipt_email"
        ) as mock_email_task, patch(
            "storefront.api.v1.purchases.export_purchase_audit"
        ) as mock_audit_task:
            await purchase_game(receipts[0].game_id, user, purchases)

        assert mock_email_task.delay.call_args.kwargs["total"] == "29.99"
        mock_audit_task.delay.assert_called_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            InsufficientFundsError("u", Decimal("69.98"), Decimal("10.00")),
            AlreadyOwnedError([uuid.uuid4()]),
        ],
    )
    async def test_failed_purchase_does_not_queue_tasks(
        self, user: User, error: Exception
    ) -> None:
        purchases = MagicMock()
        purchases.purchase_batch = AsyncMock(side_effect=error)

        with patch(
            "storefront.api.v1.purchases.send_purchase_receipt_email"
        ) as mock_email_task, patch(
            "storefront.api.v1.purchases.export_purchase_audit"
        ) as mock_audit_task:
            with pytest.raises(type(error)):
                await purchase_games(PurchaseRequest(game_ids=[uuid.uuid4()]), user, purchases)

        mock_email_task.delay.assert_not_called()
        mock_audit_task.delay.assert_not_called()


class TestCheckoutTaskQueuing:
    """Tests for checkout endpoint task queuing behavior."""

    @pytest.fixture
    def user(self) -> User:
        return User(id=uuid.uuid4(), username="carter", email="carter@example.com", is_active=True)

    @pytest.fixture
    def cart(self) -> MagicMock:
        return MagicMock()

    @pytest.mark.asyncio
    async def test_checkout_queues_receipt(self, user: User, cart: MagicMock) -> None:
        cart.checkout = AsyncMock(
            return_value=CartOperation(
                operation=CartOperationType.CHECKOUT,
                message="done",
                items_processed=1,
                total_amount=Decimal("29.99"),
                game_titles=["Hollow Peaks"],
            )
        )

        with patch("storefront.api.v1.cart.send_purchase_receipt_email") as mock_email_task:
            await checkout(user, cart)

        mock_email_task.delay.assert_called_once_with(
            email="carter@example.com",
            game_titles=["Hollow Peaks"],
            total="29.99",
        )
        cart.view.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_checkout_does_not_queue_receipt(
        self, user: User, cart: MagicMock
    ) -> None:
        cart.checkout = AsyncMock(
            side_effect=InsufficientFundsError("u", Decimal("29.99"), Decimal("1.00"))
        )

        with patch("storefront.api.v1.cart.send_purchase_receipt_email") as mock_email_task:
            with pytest.raises(InsufficientFundsError):
                await checkout(user, cart)

        mock_email_task.delay.assert_not_called()

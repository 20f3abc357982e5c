"""HTTP-level tests for the storefront API against an in-memory database."""

from collections.abc import AsyncGenerator
from decimal import Decimal
from unittest.mock import patch

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.api.deps import get_uow
from storefront.db.unit_of_work import UnitOfWork
from storefront.main import app
from storefront.models import OperationType
from tests.factories import Storefront


@pytest_asyncio.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[httpx.AsyncClient, None]:
    app.dependency_overrides[get_uow] = lambda: UnitOfWork(session_maker)
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


def auth(user) -> dict[str, str]:
    return {"X-User-Id": str(user.id)}


class TestBalanceEndpoints:

    @pytest.mark.asyncio
    async def test_create_deposit_and_read(
        self, client: httpx.AsyncClient, storefront: Storefront
    ) -> None:
        user = await storefront.add_user()

        created = await client.post("/api/v1/balance", headers=auth(user))
        deposited = await client.post(
            "/api/v1/balance/deposit", json={"amount": "100.00"}, headers=auth(user)
        )
        read = await client.get("/api/v1/balance", headers=auth(user))

        assert created.status_code == 201
        assert created.json()["amount"] == "0.00"
        assert deposited.status_code == 200
        assert deposited.json()["balance"] == "100.00"
        assert deposited.json()["operation"] == "DEPOSIT"
        assert read.json()["amount"] == "100.00"

    @pytest.mark.asyncio
    async def test_domain_error_envelope(
        self, client: httpx.AsyncClient, storefront: Storefront
    ) -> None:
        user = await storefront.add_funded_user("100.00")

        response = await client.post(
            "/api/v1/balance/withdraw", json={"amount": "150.00"}, headers=auth(user)
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["type"] == "InsufficientFundsError"
        assert error["status_code"] == 400
        assert "required 150.00, available 100.00" in error["message"]

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: httpx.AsyncClient, storefront: Storefront) -> None:
        user = await storefront.add_user(is_active=False)

        response = await client.get("/api/v1/balance", headers=auth(user))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_request_validation(
        self, client: httpx.AsyncClient, storefront: Storefront
    ) -> None:
        user = await storefront.add_funded_user()

        response = await client.post(
            "/api/v1/balance/deposit", json={"amount": "-5.00"}, headers=auth(user)
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_can_afford_huge_amount_is_rejected(
        self, client: httpx.AsyncClient, storefront: Storefront
    ) -> None:
        user = await storefront.add_funded_user("50.00")

        response = await client.get(
            "/api/v1/balance/can-afford", params={"amount": "1E30"}, headers=auth(user)
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_no_route_credits_arbitrary_accounts(
        self, client: httpx.AsyncClient, storefront: Storefront
    ) -> None:
        user = await storefront.add_funded_user("1.00")

        response = await client.post(
            "/api/v1/balance/admin/deposit",
            json={"user_id": str(user.id), "amount": "999999.99"},
            headers=auth(user),
        )

        assert response.status_code == 404
        assert await storefront.balance_of(user) == Decimal("1.00")
        assert [entry.operation for entry in await storefront.ledger_entries(user)] == [
            OperationType.DEPOSIT
        ]


class TestCartCheckoutEndpoint:

    @pytest.mark.asyncio
    async def test_checkout_flow(self, client: httpx.AsyncClient, storefront: Storefront) -> None:
        author = await storefront.add_user()
        first = await storefront.add_game(author, "29.99")
        second = await storefront.add_game(author, "39.99")
        buyer = await storefront.add_funded_user("100.00")

        for game in (first, second):
            added = await client.post(
                "/api/v1/cart/items", json={"game_id": str(game.id)}, headers=auth(buyer)
            )
            assert added.status_code == 201

        with patch("storefront.api.v1.cart.send_purchase_receipt_email") as mock_email_task:
            response = await client.post("/api/v1/cart/checkout", headers=auth(buyer))

        assert response.status_code == 200
        assert response.json()["items_processed"] == 2
        mock_email_task.delay.assert_called_once()
        balance = await client.get("/api/v1/balance", headers=auth(buyer))
        assert balance.json()["amount"] == "30.02"
        cart = await client.get("/api/v1/cart", headers=auth(buyer))
        assert cart.json()["total_items"] == 0

    @pytest.mark.asyncio
    async def test_double_add_is_conflict(
        self, client: httpx.AsyncClient, storefront: Storefront
    ) -> None:
        author = await storefront.add_user()
        game = await storefront.add_game(author, "1.00")
        buyer = await storefront.add_user()
        body = {"game_id": str(game.id)}

        await client.post("/api/v1/cart/items", json=body, headers=auth(buyer))
        response = await client.post("/api/v1/cart/items", json=body, headers=auth(buyer))

        assert response.status_code == 409
        assert response.json()["error"]["type"] == "AlreadyInCartError"

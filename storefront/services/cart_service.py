"""Cart aggregator: stages games and checks them out as one batch.

The cart is only cleared after the purchase orchestrator has debited the
ledger and granted ownership inside the same unit of work. A failed
checkout leaves the cart exactly as it was and re-raises the purchase
error unchanged.
"""

import logging
import uuid

from storefront.core.exceptions import (
    AlreadyInCartError,
    AlreadyOwnedError,
    EmptyCartError,
    NotFoundError,
    NotInCartError,
    SelfPurchaseError,
)
from storefront.core.money import ZERO, total
from storefront.db.unit_of_work import UnitOfWork
from storefront.models.cart_item import CartItem
from storefront.models.game import Game
from storefront.schemas.cart import CartOperation, CartSummary, CartValidation
from storefront.services import mappers
from storefront.services.purchase_service import PurchaseService

logger = logging.getLogger(__name__)


class CartService:
    """Per-user staging list delegating checkout to the purchase orchestrator."""

    def __init__(self, uow: UnitOfWork, purchases: PurchaseService) -> None:
        self.uow = uow
        self.purchases = purchases

    async def add(self, user_id: uuid.UUID, game_id: uuid.UUID) -> CartOperation:
        """Stage a game.

        Raises:
            NotFoundError: If the game does not exist
            AlreadyOwnedError: If the user already owns the game
            AlreadyInCartError: If the game is already staged
            SelfPurchaseError: If the user authored the game
        """
        async with self.uow:
            game = await self._get_game(game_id)

            if await self.uow.purchases.exists(user_id, game.id):
                raise AlreadyOwnedError([game.id], title=game.title)
            if await self.uow.cart.exists(user_id, game.id):
                raise AlreadyInCartError(str(game.id), game.title)
            if game.author_id == user_id:
                raise SelfPurchaseError([game.title])

            await self.uow.cart.add(
                CartItem(id=uuid.uuid4(), user_id=user_id, game_id=game.id)
            )
            cart_size = await self.uow.cart.count(user_id)

        logger.info(
            "Game '%s' (%s) added to cart for user %s. Cart size: %d",
            game.title, game.id, user_id, cart_size,
        )
        return mappers.added_to_cart(game, cart_size)

    async def remove(self, user_id: uuid.UUID, game_id: uuid.UUID) -> CartOperation:
        """Unstage a game.

        Raises:
            NotFoundError: If the game does not exist
            NotInCartError: If the game is not staged
        """
        async with self.uow:
            game = await self._get_game(game_id)
            if await self.uow.cart.remove(user_id, game.id) == 0:
                raise NotInCartError(str(game.id))
            cart_size = await self.uow.cart.count(user_id)

        logger.info(
            "Game '%s' (%s) removed from cart for user %s. Cart size: %d",
            game.title, game.id, user_id, cart_size,
        )
        return mappers.removed_from_cart(game, cart_size)

    async def view(self, user_id: uuid.UUID) -> CartSummary:
        """Staged games with current catalog data; an empty cart is a zero summary."""
        async with self.uow:
            rows = await self.uow.cart.list_with_games(user_id)

        logger.debug("Retrieved cart for user %s with %d items", user_id, len(rows))
        return mappers.to_cart_summary(rows)

    async def item_count(self, user_id: uuid.UUID) -> int:
        async with self.uow:
            return await self.uow.cart.count(user_id)

    async def clear(self, user_id: uuid.UUID) -> CartOperation:
        async with self.uow:
            removed = await self.uow.cart.clear(user_id)
            if removed == 0:
                raise EmptyCartError()

        logger.info("Cleared cart for user %s - removed %d items", user_id, removed)
        return mappers.cart_cleared(removed)

    async def checkout(self, user_id: uuid.UUID) -> CartOperation:
        """Purchase every staged game as one batch, then empty the cart.

        Raises:
            EmptyCartError: If nothing is staged
            Any purchase error from PurchaseService.purchase_batch, unchanged
        """
        async with self.uow:
            rows = await self.uow.cart.list_with_games(user_id)
            if not rows:
                raise EmptyCartError()

            game_ids = [game.id for _, game in rows]
            logger.info(
                "Processing checkout for user %s with %d items",
                user_id, len(game_ids),
            )
            receipts = await self.purchases.purchase_batch(user_id, game_ids)

            # Only reached once the debit and ownership rows are in place
            await self.uow.cart.clear(user_id)
            charged = total(receipt.purchase_price for receipt in receipts)

        logger.info(
            "Checkout completed for user %s. %d games added to library, %s charged",
            user_id, len(receipts), charged,
        )
        return mappers.checked_out(receipts, charged)

    async def validate_for_checkout(self, user_id: uuid.UUID) -> bool:
        async with self.uow:
            rows = await self.uow.cart.list_with_games(user_id)
            if not rows:
                return False
            return await self.purchases.can_purchase_all(
                user_id, [game.id for _, game in rows]
            )

    async def validation_details(self, user_id: uuid.UUID) -> CartValidation:
        """Collect every reason the cart cannot be checked out."""
        async with self.uow:
            rows = await self.uow.cart.list_with_games(user_id)
            balance = await self.uow.balances.get_by_user(user_id)
            available = balance.amount if balance is not None else ZERO

            if not rows:
                return CartValidation(
                    can_checkout=False,
                    message="Cart is empty",
                    issues=[],
                    total_cost=ZERO,
                    user_balance=available,
                )

            games = [game for _, game in rows]
            cost = total(game.price for game in games)
            owned = set(
                await self.uow.purchases.owned_game_ids(user_id, [game.id for game in games])
            )

        issues = []
        owned_titles = [game.title for game in games if game.id in owned]
        if owned_titles:
            issues.append(f"You already own: {', '.join(owned_titles)}")
        own_titles = [game.title for game in games if game.author_id == user_id]
        if own_titles:
            issues.append(f"Cannot purchase your own games: {', '.join(own_titles)}")
        if balance is None:
            issues.append("No balance exists for this user")
        elif available < cost:
            issues.append(f"Insufficient funds. Need {cost} but have {available}")

        return CartValidation(
            can_checkout=not issues,
            message="Cart is valid for checkout" if not issues else "; ".join(issues),
            issues=issues,
            total_cost=cost,
            user_balance=available,
        )

    async def _get_game(self, game_id: uuid.UUID) -> Game:
        game = await self.uow.games.get(game_id)
        if game is None:
            raise NotFoundError("Game", str(game_id))
        return game

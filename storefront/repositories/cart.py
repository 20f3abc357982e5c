"""Data access for the cart store."""

import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from storefront.core.exceptions import AlreadyInCartError
from storefront.models.cart_item import CartItem
from storefront.models.game import Game
from storefront.repositories.base import Repository, is_unique_violation


class CartRepository(Repository):

    async def exists(self, user_id: uuid.UUID, game_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            select(CartItem.id).where(
                CartItem.user_id == user_id,
                CartItem.game_id == game_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def add(self, item: CartItem) -> CartItem:
        self.session.add(item)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise AlreadyInCartError(str(item.game_id)) from exc
            raise
        return item

    async def remove(self, user_id: uuid.UUID, game_id: uuid.UUID) -> int:
        result = await self.session.execute(
            delete(CartItem).where(
                CartItem.user_id == user_id,
                CartItem.game_id == game_id,
            )
        )
        return result.rowcount

    async def count(self, user_id: uuid.UUID) -> int:
        result = await self.session.execute(
            select(func.count(CartItem.id)).where(CartItem.user_id == user_id)
        )
        return result.scalar_one()

    async def list_with_games(self, user_id: uuid.UUID) -> list[tuple[CartItem, Game]]:
        """Staged items joined with current catalog data, oldest first."""
        result = await self.session.execute(
            select(CartItem, Game)
            .join(Game, Game.id == CartItem.game_id)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.added_at, CartItem.id)
        )
        return [(item, game) for item, game in result.all()]

    async def clear(self, user_id: uuid.UUID) -> int:
        """Delete every staged item for the user and return how many were removed."""
        result = await self.session.execute(
            delete(CartItem).where(CartItem.user_id == user_id)
        )
        return result.rowcount

"""Data access for the ownership store (purchase records)."""

import uuid
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from storefront.core.exceptions import AlreadyOwnedError
from storefront.models.game import Game
from storefront.models.purchase_record import PurchaseRecord
from storefront.repositories.base import Repository, is_unique_violation


class PurchaseRepository(Repository):

    async def exists(self, user_id: uuid.UUID, game_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            select(PurchaseRecord.id).where(
                PurchaseRecord.user_id == user_id,
                PurchaseRecord.game_id == game_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def owned_game_ids(
        self,
        user_id: uuid.UUID,
        game_ids: Sequence[uuid.UUID],
    ) -> list[uuid.UUID]:
        """Return the subset of ``game_ids`` the user already owns, in input order."""
        if not game_ids:
            return []
        result = await self.session.execute(
            select(PurchaseRecord.game_id).where(
                PurchaseRecord.user_id == user_id,
                PurchaseRecord.game_id.in_(game_ids),
            )
        )
        owned = set(result.scalars())
        return [game_id for game_id in game_ids if game_id in owned]

    async def add_all(self, records: Sequence[PurchaseRecord]) -> list[PurchaseRecord]:
        """Insert ownership rows; a duplicate (user, game) becomes AlreadyOwnedError.

        The duplicate can only come from a concurrent purchase that committed
        after the eligibility check. The failed transaction is rolled back so
        the rows that now exist can be read and named in the error. The
        enclosing unit of work fails either way.
        """
        self.session.add_all(records)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            user_id = records[0].user_id
            requested = [record.game_id for record in records]
            await self.session.rollback()
            owned = await self.owned_game_ids(user_id, requested)
            raise AlreadyOwnedError(owned or requested) from exc
        return list(records)

    async def list_for_user(self, user_id: uuid.UUID) -> list[tuple[PurchaseRecord, Game]]:
        """Purchases joined with their games, newest first."""
        result = await self.session.execute(
            select(PurchaseRecord, Game)
            .join(Game, Game.id == PurchaseRecord.game_id)
            .where(PurchaseRecord.user_id == user_id)
            .order_by(PurchaseRecord.purchased_at.desc())
        )
        return [(record, game) for record, game in result.all()]

    async def list_for_game(self, game_id: uuid.UUID) -> list[tuple[PurchaseRecord, Game]]:
        result = await self.session.execute(
            select(PurchaseRecord, Game)
            .join(Game, Game.id == PurchaseRecord.game_id)
            .where(PurchaseRecord.game_id == game_id)
            .order_by(PurchaseRecord.purchased_at.desc())
        )
        return [(record, game) for record, game in result.all()]

    async def list_sales_for_author(
        self,
        author_id: uuid.UUID,
    ) -> list[tuple[PurchaseRecord, Game]]:
        """Purchases of games published by ``author_id``, newest first."""
        result = await self.session.execute(
            select(PurchaseRecord, Game)
            .join(Game, Game.id == PurchaseRecord.game_id)
            .where(Game.author_id == author_id)
            .order_by(PurchaseRecord.purchased_at.desc())
        )
        return [(record, game) for record, game in result.all()]

    async def prices_for_author(self, author_id: uuid.UUID) -> list[Decimal]:
        """Prices paid for the author's games; summed by the caller in Decimal."""
        result = await self.session.execute(
            select(PurchaseRecord.purchase_price)
            .join(Game, Game.id == PurchaseRecord.game_id)
            .where(Game.author_id == author_id)
        )
        return list(result.scalars())

"""Storage for audit history entries written by the default recorder."""

import uuid
from collections.abc import Sequence

from sqlalchemy import select

from storefront.models.game_history import GameHistory
from storefront.repositories.base import Repository


class GameHistoryRepository(Repository):

    async def add_all(self, entries: Sequence[GameHistory]) -> None:
        self.session.add_all(entries)
        await self.session.flush()

    async def list_for_game(self, game_id: uuid.UUID) -> list[GameHistory]:
        result = await self.session.execute(
            select(GameHistory)
            .where(GameHistory.game_id == game_id)
            .order_by(GameHistory.changed_at.desc())
        )
        return list(result.scalars())

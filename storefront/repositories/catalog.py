"""Lookups against the user and game tables owned by other subsystems."""

import uuid
from collections.abc import Sequence

from sqlalchemy import select

from storefront.models.game import Game
from storefront.models.user import User
from storefront.repositories.base import Repository


class UserRepository(Repository):

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self.session.get(User, user_id)

    async def exists(self, user_id: uuid.UUID) -> bool:
        result = await self.session.execute(select(User.id).where(User.id == user_id))
        return result.scalar_one_or_none() is not None

    async def add(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        return user


class GameRepository(Repository):

    async def get(self, game_id: uuid.UUID) -> Game | None:
        return await self.session.get(Game, game_id)

    async def get_many(self, game_ids: Sequence[uuid.UUID]) -> list[Game]:
        """Resolve games by id, preserving the order of ``game_ids``.

        Ids that do not resolve are simply absent from the result.
        """
        if not game_ids:
            return []
        result = await self.session.execute(select(Game).where(Game.id.in_(game_ids)))
        by_id = {game.id: game for game in result.scalars()}
        return [by_id[game_id] for game_id in game_ids if game_id in by_id]

    async def add(self, game: Game) -> Game:
        self.session.add(game)
        await self.session.flush()
        return game

"""Audit recording for purchase events.

The commerce core builds history entries and hands them to an
``AuditRecorder``. The default recorder writes them through the active
unit of work, so an entry exists only if the purchase commits.
"""

import logging
import uuid
from collections.abc import Sequence
from decimal import Decimal
from typing import Protocol

from storefront.core.exceptions import InvalidRequestError
from storefront.db.unit_of_work import UnitOfWork
from storefront.models.game import Game
from storefront.models.game_history import GameHistory, HistoryAction

logger = logging.getLogger(__name__)


class AuditRecorder(Protocol):
    async def record_purchase(
        self, game: Game, purchaser_id: uuid.UUID, price: Decimal
    ) -> None: ...

    async def record_purchases(
        self,
        games: Sequence[Game],
        purchaser_id: uuid.UUID,
        prices: Sequence[Decimal],
    ) -> None: ...


def purchase_entry(game: Game, purchaser_id: uuid.UUID, price: Decimal) -> GameHistory:
    return GameHistory(
        game_id=game.id,
        action=HistoryAction.PURCHASE,
        field_changed="price",
        new_value=str(price),
        changed_by=purchaser_id,
        description=f"Game '{game.title}' purchased for {price}",
    )


class GameHistoryRecorder:
    """Writes one ``game_history`` row per purchased game."""

    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    async def record_purchase(
        self, game: Game, purchaser_id: uuid.UUID, price: Decimal
    ) -> None:
        await self.record_purchases([game], purchaser_id, [price])

    async def record_purchases(
        self,
        games: Sequence[Game],
        purchaser_id: uuid.UUID,
        prices: Sequence[Decimal],
    ) -> None:
        if len(prices) != len(games):
            raise InvalidRequestError(
                f"Purchase price count {len(prices)} does not match game count {len(games)}"
            )
        entries = [
            purchase_entry(game, purchaser_id, price)
            for game, price in zip(games, prices)
        ]
        async with self.uow:
            await self.uow.history.add_all(entries)
        logger.info("Recorded %d game purchases for user %s", len(entries), purchaser_id)

"""Purchase orchestrator: turns catalog games into paid-for ownership.

A purchase attempt moves through

    Requested -> Validated -> Debited -> Granted -> Recorded -> Committed

or stops at Rejected on the first failed check. All success steps run in
one unit of work; any exception rolls back the debit, the ownership rows
and the audit entries together.

Validation order for a single game:
1. Game exists (NotFoundError)
2. Not already owned (AlreadyOwnedError)
3. Not authored by the buyer (SelfPurchaseError)
4. Balance covers the price (InsufficientFundsError)

Batches run the same checks over every game, report every owned id at
once, and debit the ledger a single time for the exact decimal total.
"""

import logging
import uuid
from collections.abc import Sequence
from decimal import Decimal

from storefront.core.exceptions import (
    AlreadyOwnedError,
    InsufficientFundsError,
    InvalidRequestError,
    NotFoundError,
    SelfPurchaseError,
)
from storefront.core.money import ZERO, total
from storefront.db.unit_of_work import UnitOfWork
from storefront.models.game import Game
from storefront.schemas.purchase import (
    PurchaseEligibility,
    PurchaseReceipt,
    PurchaseStats,
    RevenueRead,
)
from storefront.services.audit import AuditRecorder
from storefront.services.ledger_service import BalanceLedger
from storefront.services.mappers import new_purchase_record, to_purchase_stats, to_receipt

logger = logging.getLogger(__name__)


class PurchaseService:
    """Validates eligibility, debits the ledger and grants ownership."""

    def __init__(
        self,
        uow: UnitOfWork,
        ledger: BalanceLedger,
        audit: AuditRecorder,
    ) -> None:
        self.uow = uow
        self.ledger = ledger
        self.audit = audit

    async def purchase_single(
        self, user_id: uuid.UUID, game_id: uuid.UUID
    ) -> PurchaseReceipt:
        """Purchase one game.

        Raises:
            NotFoundError: If the game or the user's balance does not exist
            AlreadyOwnedError: If the user already owns the game
            SelfPurchaseError: If the user authored the game
            InsufficientFundsError: If the balance is below the price
        """
        async with self.uow:
            game = await self.uow.games.get(game_id)
            if game is None:
                raise NotFoundError("Game", str(game_id))

            if await self.uow.purchases.exists(user_id, game.id):
                raise AlreadyOwnedError([game.id], title=game.title)
            if game.author_id == user_id:
                raise SelfPurchaseError([game.title])
            await self._ensure_affordable(user_id, game.price)

            transaction_id = await self._debit(user_id, game.price)
            [record] = await self.uow.purchases.add_all(
                [new_purchase_record(user_id, game)]
            )
            await self.audit.record_purchase(game, user_id, record.purchase_price)
            receipt = to_receipt(record, game)

        logger.info(
            "Game '%s' purchased by user %s for %s - purchase: %s, transaction: %s",
            game.title, user_id, record.purchase_price, record.id, transaction_id,
        )
        return receipt

    async def purchase_batch(
        self, user_id: uuid.UUID, game_ids: Sequence[uuid.UUID]
    ) -> list[PurchaseReceipt]:
        """Purchase several games atomically with one ledger debit.

        Raises:
            InvalidRequestError: If ``game_ids`` is empty or has duplicates
            NotFoundError: If any id does not resolve, or no balance exists
            AlreadyOwnedError: Listing every already-owned id
            SelfPurchaseError: Naming every game the user authored
            InsufficientFundsError: If the balance is below the total
        """
        game_ids = self._check_batch_request(game_ids)

        async with self.uow:
            games = await self._resolve_all(game_ids)
            await self._validate_batch(user_id, games)

            amount = total(game.price for game in games)
            await self._ensure_affordable(user_id, amount)

            transaction_id = await self._debit(user_id, amount)
            records = await self.uow.purchases.add_all(
                [new_purchase_record(user_id, game) for game in games]
            )
            await self.audit.record_purchases(
                games, user_id, [record.purchase_price for record in records]
            )
            receipts = [to_receipt(record, game) for record, game in zip(records, games)]

        logger.info(
            "Batch purchase completed for user %s: %d games for %s - transaction: %s",
            user_id, len(games), amount, transaction_id,
        )
        return receipts

    async def check_eligibility(
        self, user_id: uuid.UUID, game_id: uuid.UUID
    ) -> PurchaseEligibility:
        """Report whether a single purchase would succeed, without raising."""
        async with self.uow:
            game = await self.uow.games.get(game_id)
            if game is None:
                return PurchaseEligibility(
                    eligible=False, message="Game not found", game_id=game_id
                )

            balance = await self.uow.balances.get_by_user(user_id)
            sufficient = balance is not None and balance.has_sufficient_funds(game.price)

            eligible = False
            if await self.uow.purchases.exists(user_id, game.id):
                message = f"You already own this game: {game.title}"
            elif game.author_id == user_id:
                message = f"You cannot purchase your own game: {game.title}"
            elif balance is None:
                message = "No balance exists for this user"
            elif not sufficient:
                message = (
                    f"Insufficient funds: required {game.price}, "
                    f"available {balance.amount}"
                )
            else:
                eligible = True
                message = "Game is eligible for purchase"

        return PurchaseEligibility(
            eligible=eligible,
            message=message,
            game_id=game.id,
            game_title=game.title,
            game_price=game.price,
            user_balance=balance.amount if balance is not None else None,
            sufficient_funds=sufficient,
        )

    async def can_purchase_all(
        self, user_id: uuid.UUID, game_ids: Sequence[uuid.UUID]
    ) -> bool:
        """Run every batch check without committing anything."""
        if not game_ids or len(set(game_ids)) != len(game_ids):
            return False

        async with self.uow:
            try:
                games = await self._resolve_all(game_ids)
                await self._validate_batch(user_id, games)
            except (NotFoundError, AlreadyOwnedError, SelfPurchaseError) as exc:
                logger.debug("Batch for user %s is not purchasable: %s", user_id, exc.message)
                return False

            balance = await self.uow.balances.get_by_user(user_id)
            if balance is None:
                return False
            return balance.has_sufficient_funds(total(game.price for game in games))

    async def owned_game_ids(
        self, user_id: uuid.UUID, game_ids: Sequence[uuid.UUID]
    ) -> list[uuid.UUID]:
        async with self.uow:
            return await self.uow.purchases.owned_game_ids(user_id, list(game_ids))

    async def purchase_history(self, user_id: uuid.UUID) -> list[PurchaseReceipt]:
        """Everything the user owns, newest first."""
        async with self.uow:
            rows = await self.uow.purchases.list_for_user(user_id)
        return [to_receipt(record, game) for record, game in rows]

    async def game_purchases(self, game_id: uuid.UUID) -> list[PurchaseReceipt]:
        async with self.uow:
            rows = await self.uow.purchases.list_for_game(game_id)
        return [to_receipt(record, game) for record, game in rows]

    async def purchase_stats(self, user_id: uuid.UUID) -> PurchaseStats:
        async with self.uow:
            rows = await self.uow.purchases.list_for_user(user_id)
        return to_purchase_stats([record for record, _ in rows])

    async def sales_for_author(self, author_id: uuid.UUID) -> list[PurchaseReceipt]:
        """Purchases of every game the developer published."""
        async with self.uow:
            rows = await self.uow.purchases.list_sales_for_author(author_id)
        return [to_receipt(record, game) for record, game in rows]

    async def revenue_for_author(self, author_id: uuid.UUID) -> RevenueRead:
        async with self.uow:
            prices = await self.uow.purchases.prices_for_author(author_id)
        return RevenueRead(
            author_id=author_id,
            total_revenue=total(prices),
            sales_count=len(prices),
        )

    @staticmethod
    def _check_batch_request(game_ids: Sequence[uuid.UUID]) -> list[uuid.UUID]:
        game_ids = list(game_ids)
        if not game_ids:
            raise InvalidRequestError("At least one game id must be provided")
        if len(set(game_ids)) != len(game_ids):
            raise InvalidRequestError("Duplicate game ids in purchase request")
        return game_ids

    async def _resolve_all(self, game_ids: Sequence[uuid.UUID]) -> list[Game]:
        # Strict: a partial resolution is a hard failure, never a partial purchase
        games = await self.uow.games.get_many(game_ids)
        if len(games) != len(game_ids):
            raise NotFoundError("One or more games not found")
        return games

    async def _validate_batch(self, user_id: uuid.UUID, games: Sequence[Game]) -> None:
        owned = await self.uow.purchases.owned_game_ids(user_id, [game.id for game in games])
        if owned:
            raise AlreadyOwnedError(owned)

        own_titles = [game.title for game in games if game.author_id == user_id]
        if own_titles:
            raise SelfPurchaseError(own_titles)

    async def _ensure_affordable(self, user_id: uuid.UUID, amount: Decimal) -> None:
        balance = await self.ledger.get(user_id)
        if amount > ZERO and not await self.ledger.can_afford(user_id, amount):
            raise InsufficientFundsError(str(user_id), amount, balance.amount)

    async def _debit(self, user_id: uuid.UUID, amount: Decimal) -> uuid.UUID | None:
        # Free games grant ownership without a ledger entry
        if amount <= ZERO:
            return None
        transaction = await self.ledger.debit_for_purchase(user_id, amount)
        return transaction.id


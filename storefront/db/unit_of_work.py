"""Explicit unit-of-work boundary for the commerce core.

Every public ledger, purchase and cart operation runs inside
``async with uow:``. The outermost block owns the session and its
transaction: a clean exit commits, any exception rolls back and
propagates. Nested blocks join the open transaction, so a checkout and
the batch purchase it delegates to commit or roll back together.

Example:
    uow = UnitOfWork(get_async_session_maker())
    async with uow:
        balance = await uow.balances.get_for_update(user_id)
        ...
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.repositories.balance import BalanceRepository, BalanceTransactionRepository
from storefront.repositories.cart import CartRepository
from storefront.repositories.catalog import GameRepository, UserRepository
from storefront.repositories.history import GameHistoryRepository
from storefront.repositories.purchase import PurchaseRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Async context manager wrapping one database transaction.

    Repositories are only available while the unit of work is active.
    """

    users: UserRepository
    games: GameRepository
    balances: BalanceRepository
    balance_transactions: BalanceTransactionRepository
    purchases: PurchaseRepository
    cart: CartRepository
    history: GameHistoryRepository

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker
        self._session: AsyncSession | None = None
        self._depth = 0

    @property
    def active(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work is not active")
        return self._session

    async def __aenter__(self) -> "UnitOfWork":
        if self._depth == 0:
            session = self._session_maker()
            self._session = session
            self.users = UserRepository(session)
            self.games = GameRepository(session)
            self.balances = BalanceRepository(session)
            self.balance_transactions = BalanceTransactionRepository(session)
            self.purchases = PurchaseRepository(session)
            self.cart = CartRepository(session)
            self.history = GameHistoryRepository(session)
        self._depth += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self._depth -= 1
        if self._depth > 0:
            # Joined an outer unit of work; it decides commit or rollback
            return None

        session = self.session
        try:
            if exc_type is None:
                await session.commit()
            else:
                logger.debug("Rolling back unit of work after %s", exc_type.__name__)
                await session.rollback()
        finally:
            await session.close()
            self._session = None
        return None

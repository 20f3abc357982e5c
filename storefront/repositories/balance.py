"""Data access for balances and their transaction log."""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from storefront.core.exceptions import BalanceAlreadyExistsError
from storefront.models.balance import Balance
from storefront.models.balance_transaction import BalanceTransaction
from storefront.repositories.base import Repository, is_unique_violation


class BalanceRepository(Repository):

    async def get_by_user(self, user_id: uuid.UUID) -> Balance | None:
        result = await self.session.execute(
            select(Balance).where(Balance.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, user_id: uuid.UUID) -> Balance | None:
        """Read the balance row and hold an exclusive lock until commit.

        Other units of work mutating the same balance wait here.
        """
        result = await self.session.execute(
            select(Balance)
            .where(Balance.user_id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add(self, balance: Balance) -> Balance:
        self.session.add(balance)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise BalanceAlreadyExistsError(str(balance.user_id)) from exc
            raise
        return balance

    async def delete(self, balance: Balance) -> None:
        """Delete a balance and, explicitly, its transaction log."""
        await self.session.execute(
            delete(BalanceTransaction).where(BalanceTransaction.balance_id == balance.id)
        )
        await self.session.delete(balance)
        await self.session.flush()


class BalanceTransactionRepository(Repository):

    async def add(self, transaction: BalanceTransaction) -> BalanceTransaction:
        self.session.add(transaction)
        await self.session.flush()
        return transaction

    async def list_for_balance(self, balance_id: uuid.UUID) -> list[BalanceTransaction]:
        """Ledger entries for a balance, newest first."""
        result = await self.session.execute(
            select(BalanceTransaction)
            .where(BalanceTransaction.balance_id == balance_id)
            .order_by(BalanceTransaction.created_at.desc())
        )
        return list(result.scalars())

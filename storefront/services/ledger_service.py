"""Balance ledger: the only component that mutates a user's balance.

Every mutation follows the same shape inside one unit of work:

1. Validate the amount (positive, at most 2 decimal places, within limit)
2. Read the balance row with SELECT ... FOR UPDATE
3. Check sufficient funds for debits
4. Write the new amount
5. Append a BalanceTransaction with before/after snapshots

Steps 2-5 share one transaction, so two concurrent mutations of the
same balance are serialized by the row lock and the log always agrees
with the balance.
"""

import logging
import uuid
from decimal import Decimal

from storefront.core.exceptions import (
    BalanceAlreadyExistsError,
    InsufficientFundsError,
    NotFoundError,
)
from storefront.core.money import MAX_AMOUNT, ZERO, quantize, validate_amount
from storefront.db.unit_of_work import UnitOfWork
from storefront.models.balance import Balance
from storefront.models.balance_transaction import BalanceTransaction, OperationType

logger = logging.getLogger(__name__)


def balance_not_found(user_id: uuid.UUID) -> NotFoundError:
    return NotFoundError(f"Balance not found for user {user_id}")


class BalanceLedger:
    """Service owning per-user balances and their transaction log.

    Each public method is one unit of work. When called while the unit
    of work is already open (e.g. from a purchase), it joins that
    transaction instead of committing on its own.
    """

    def __init__(self, uow: UnitOfWork, max_amount: Decimal = MAX_AMOUNT) -> None:
        self.uow = uow
        self.max_amount = max_amount

    async def create(self, user_id: uuid.UUID) -> Balance:
        """Create a zero balance for a user.

        Raises:
            NotFoundError: If the user does not exist
            BalanceAlreadyExistsError: If the user already has a balance
        """
        async with self.uow:
            if not await self.uow.users.exists(user_id):
                raise NotFoundError("User", str(user_id))
            if await self.uow.balances.get_by_user(user_id) is not None:
                raise BalanceAlreadyExistsError(str(user_id))
            balance = await self.uow.balances.add(
                Balance(id=uuid.uuid4(), user_id=user_id, amount=ZERO)
            )

        logger.info("Balance created for user %s", user_id)
        return balance

    async def get(self, user_id: uuid.UUID) -> Balance:
        async with self.uow:
            balance = await self.uow.balances.get_by_user(user_id)
            if balance is None:
                raise balance_not_found(user_id)
        return balance

    async def can_afford(self, user_id: uuid.UUID, amount: Decimal) -> bool:
        """Return True if the user's balance covers ``amount``.

        Raises:
            InvalidAmountError: If amount is not positive or has more than 2 places
            NotFoundError: If the user has no balance
        """
        amount = validate_amount(amount, "Requested")
        balance = await self.get(user_id)
        return balance.has_sufficient_funds(amount)

    async def deposit(
        self, user_id: uuid.UUID, amount: Decimal
    ) -> tuple[Balance, BalanceTransaction]:
        """Add funds to the user's balance.

        Raises:
            InvalidAmountError: If amount <= 0, over the limit or wrong scale
            NotFoundError: If the user has no balance
        """
        amount = validate_amount(amount, "Deposit", self.max_amount)
        async with self.uow:
            balance, transaction = await self._apply(user_id, OperationType.DEPOSIT, amount)

        logger.info(
            "Deposit successful - user: %s, amount: %s, new balance: %s",
            user_id, amount, balance.amount,
        )
        return balance, transaction

    async def withdraw(
        self, user_id: uuid.UUID, amount: Decimal
    ) -> tuple[Balance, BalanceTransaction]:
        """Remove funds from the user's balance.

        Raises:
            InvalidAmountError: If amount <= 0, over the limit or wrong scale
            NotFoundError: If the user has no balance
            InsufficientFundsError: If amount > current balance
        """
        amount = validate_amount(amount, "Withdrawal", self.max_amount)
        async with self.uow:
            balance, transaction = await self._apply(user_id, OperationType.WITHDRAWAL, amount)

        logger.info(
            "Withdrawal successful - user: %s, amount: %s, new balance: %s",
            user_id, amount, balance.amount,
        )
        return balance, transaction

    async def debit_for_purchase(
        self, user_id: uuid.UUID, amount: Decimal
    ) -> BalanceTransaction:
        """Debit a purchase total, tagged PURCHASE.

        Meant to run inside the purchase's unit of work. The single-deposit
        limit does not apply since a batch total may exceed it.
        """
        amount = validate_amount(amount, "Purchase")
        async with self.uow:
            balance, transaction = await self._apply(user_id, OperationType.PURCHASE, amount)

        logger.debug("Purchase debit of %s for user %s, balance now %s",
                     amount, user_id, balance.amount)
        return transaction

    async def admin_deposit(
        self, actor_id: uuid.UUID, user_id: uuid.UUID, amount: Decimal
    ) -> tuple[Balance, BalanceTransaction]:
        """Credit another user's balance on behalf of an administrator."""
        amount = validate_amount(amount, "Deposit", self.max_amount)
        async with self.uow:
            balance, transaction = await self._apply(
                user_id, OperationType.ADMIN_DEPOSIT, amount
            )

        logger.info(
            "Admin deposit - actor: %s, user: %s, amount: %s, new balance: %s",
            actor_id, user_id, amount, balance.amount,
        )
        return balance, transaction

    async def delete(self, user_id: uuid.UUID) -> None:
        """Delete the user's balance together with its transaction log."""
        async with self.uow:
            balance = await self.uow.balances.get_for_update(user_id)
            if balance is None:
                raise balance_not_found(user_id)
            await self.uow.balances.delete(balance)

        logger.info("Balance deleted for user %s", user_id)

    async def list_transactions(self, user_id: uuid.UUID) -> list[BalanceTransaction]:
        """Ledger entries for the user's balance, newest first."""
        async with self.uow:
            balance = await self.uow.balances.get_by_user(user_id)
            if balance is None:
                raise balance_not_found(user_id)
            return await self.uow.balance_transactions.list_for_balance(balance.id)

    async def _apply(
        self,
        user_id: uuid.UUID,
        operation: OperationType,
        amount: Decimal,
    ) -> tuple[Balance, BalanceTransaction]:
        # Caller must hold the unit of work open
        balance = await self.uow.balances.get_for_update(user_id)
        if balance is None:
            raise balance_not_found(user_id)

        balance_before = balance.amount
        if operation.is_credit:
            balance_after = quantize(balance_before + amount)
        else:
            if balance_before < amount:
                raise InsufficientFundsError(str(user_id), amount, balance_before)
            balance_after = quantize(balance_before - amount)

        balance.amount = balance_after
        transaction = await self.uow.balance_transactions.add(
            BalanceTransaction(
                id=uuid.uuid4(),
                balance_id=balance.id,
                operation=operation,
                amount=amount,
                balance_before=balance_before,
                balance_after=balance_after,
            )
        )
        return balance, transaction

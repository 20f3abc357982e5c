"""Balance ledger API endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Query

from storefront.api.deps import CurrentUser, Ledger
from storefront.schemas.balance import (
    AmountRequest,
    BalanceOperationRead,
    BalanceRead,
    BalanceTransactionRead,
)
from storefront.services.mappers import to_operation_read

router = APIRouter(prefix="/balance", tags=["balance"])


@router.post("", response_model=BalanceRead, status_code=201)
async def create_balance(user: CurrentUser, ledger: Ledger):
    """Create the caller's balance at 0.00. Fails with 409 if it already exists."""
    return await ledger.create(user.id)


@router.get("", response_model=BalanceRead)
async def get_balance(user: CurrentUser, ledger: Ledger):
    return await ledger.get(user.id)


@router.delete("", status_code=204)
async def delete_balance(user: CurrentUser, ledger: Ledger) -> None:
    await ledger.delete(user.id)


@router.post("/deposit", response_model=BalanceOperationRead)
async def deposit(request: AmountRequest, user: CurrentUser, ledger: Ledger):
    """
    Deposit funds into the caller's balance.

    - **amount**: positive, at most 2 decimal places, up to the configured maximum

    Returns the new balance and the ledger entry id.
    """
    balance, transaction = await ledger.deposit(user.id, request.amount)
    return to_operation_read(user.id, balance, transaction)


@router.post("/withdraw", response_model=BalanceOperationRead)
async def withdraw(request: AmountRequest, user: CurrentUser, ledger: Ledger):
    balance, transaction = await ledger.withdraw(user.id, request.amount)
    return to_operation_read(user.id, balance, transaction)


@router.get("/transactions", response_model=list[BalanceTransactionRead])
async def list_transactions(user: CurrentUser, ledger: Ledger):
    """Ledger entries for the caller, newest first."""
    return await ledger.list_transactions(user.id)


@router.get("/can-afford")
async def can_afford(
    user: CurrentUser,
    ledger: Ledger,
    amount: Decimal = Query(..., gt=0, decimal_places=2),
) -> dict:
    return {"amount": str(amount), "can_afford": await ledger.can_afford(user.id, amount)}

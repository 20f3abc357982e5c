"""API dependency injection.

Provides FastAPI dependencies that build one unit of work per request
and wire the commerce services around it by constructor injection.
The current user is resolved once here and passed explicitly into
every core call.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header

from storefront.core.config import get_settings
from storefront.core.exceptions import NotFoundError
from storefront.db.session import get_async_session_maker
from storefront.db.unit_of_work import UnitOfWork
from storefront.models.user import User
from storefront.services.audit import GameHistoryRecorder
from storefront.services.cart_service import CartService
from storefront.services.ledger_service import BalanceLedger
from storefront.services.purchase_service import PurchaseService


def get_uow() -> UnitOfWork:
    """One unit of work per request, shared by every service below."""
    return UnitOfWork(get_async_session_maker())


def get_ledger(uow: Annotated[UnitOfWork, Depends(get_uow)]) -> BalanceLedger:
    return BalanceLedger(uow, max_amount=get_settings().MAX_TRANSACTION_AMOUNT)


def get_purchase_service(
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    ledger: Annotated[BalanceLedger, Depends(get_ledger)],
) -> PurchaseService:
    return PurchaseService(uow, ledger, GameHistoryRecorder(uow))


def get_cart_service(
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    purchases: Annotated[PurchaseService, Depends(get_purchase_service)],
) -> CartService:
    return CartService(uow, purchases)


async def get_current_user(
    uow: Annotated[UnitOfWork, Depends(get_uow)],
    x_user_id: Annotated[uuid.UUID, Header()],
) -> User:
    """Resolve the caller from the X-User-Id header.

    Stands in for the token-based identity layer, which lives outside
    the commerce core.
    """
    async with uow:
        user = await uow.users.get(x_user_id)
    if user is None or not user.is_active:
        raise NotFoundError("User", str(x_user_id))
    return user


# Type aliases for cleaner dependency injection syntax
CurrentUser = Annotated[User, Depends(get_current_user)]
Ledger = Annotated[BalanceLedger, Depends(get_ledger)]
Purchases = Annotated[PurchaseService, Depends(get_purchase_service)]
Cart = Annotated[CartService, Depends(get_cart_service)]

# SQLAlchemy ORM Models
"""Model package exports for Alembic discovery and application use.

All models must be imported here to ensure Alembic can discover them
for automatic migration generation.
"""

from storefront.models.user import User
from storefront.models.game import Game
from storefront.models.balance import Balance
from storefront.models.balance_transaction import BalanceTransaction, OperationType
from storefront.models.cart_item import CartItem
from storefront.models.purchase_record import PurchaseRecord
from storefront.models.game_history import GameHistory, HistoryAction

__all__ = [
    "User",
    "Game",
    "Balance",
    "BalanceTransaction",
    "OperationType",
    "CartItem",
    "PurchaseRecord",
    "GameHistory",
    "HistoryAction",
]

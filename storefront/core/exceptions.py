"""Custom exception classes for the application.

Provides a hierarchy of exceptions for consistent error handling
across the commerce core with appropriate HTTP status codes.
Monetary values are carried as plain decimals; display formatting
belongs to the caller.
"""

from collections.abc import Iterable
from decimal import Decimal


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(AppException):
    """Resource not found exception.

    Raised when a referenced user, game or balance does not exist.
    """

    def __init__(self, resource: str, identifier: str | None = None) -> None:
        if identifier is None:
            message = resource
        else:
            message = f"{resource} with id {identifier} not found"
        super().__init__(message=message, status_code=404)
        self.resource = resource
        self.identifier = identifier


class ConflictError(AppException):
    """Resource conflict exception.

    Raised when there's a conflict such as duplicate entries.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message=message, status_code=409)


class ValidationError(AppException):
    """Input validation failed exception.

    Raised when input data fails validation rules.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message=message, status_code=422)


class BalanceAlreadyExistsError(ConflictError):
    """A balance was created twice for the same user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"Balance already exists for user {user_id}")
        self.user_id = user_id


class AlreadyOwnedError(ConflictError):
    """Purchase or cart-add attempted for a game the user already owns.

    For batch purchases ``game_ids`` lists every owned id, not just the first.
    """

    def __init__(self, game_ids: Iterable[str], title: str | None = None) -> None:
        self.game_ids = [str(game_id) for game_id in game_ids]
        if title is not None:
            message = f"You already own this game: {title}"
        else:
            message = f"You already own games with IDs: {', '.join(self.game_ids)}"
        super().__init__(message)


class AlreadyInCartError(ConflictError):
    """Cart-add attempted for a game that is already staged."""

    def __init__(self, game_id: str, title: str | None = None) -> None:
        super().__init__(f"Game is already in your cart: {title or game_id}")
        self.game_id = game_id


class NotInCartError(AppException):
    """Cart-remove attempted for a game that is not staged."""

    def __init__(self, game_id: str) -> None:
        super().__init__(
            message=f"Game with id {game_id} is not in your cart",
            status_code=404,
        )
        self.game_id = game_id


class SelfPurchaseError(AppException):
    """User attempted to buy (or stage) a game they authored."""

    def __init__(self, titles: Iterable[str]) -> None:
        self.titles = list(titles)
        super().__init__(
            message=f"You cannot purchase your own game: {', '.join(self.titles)}",
            status_code=403,
        )


class InsufficientFundsError(AppException):
    """Insufficient balance exception.

    Raised when a withdrawal or purchase cannot be completed because
    the user's balance is below the required amount.
    """

    def __init__(
        self,
        user_id: str,
        required: Decimal,
        available: Decimal,
    ) -> None:
        super().__init__(
            message=(
                f"Insufficient funds for user {user_id}: "
                f"required {required}, available {available}"
            ),
            status_code=400,
        )
        self.user_id = user_id
        self.required = required
        self.available = available


class InvalidAmountError(ValidationError):
    """Non-positive, over-limit or wrong-scale monetary input."""

    def __init__(self, operation: str, reason: str = "must be positive") -> None:
        super().__init__(f"{operation} amount {reason}")
        self.operation = operation


class InvalidRequestError(ValidationError):
    """Structurally invalid batch input, e.g. an empty id list."""


class EmptyCartError(AppException):
    """Checkout or clear attempted on a cart with no staged items."""

    def __init__(self) -> None:
        super().__init__(message="Cart is empty", status_code=400)

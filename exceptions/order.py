"""
Order-related exceptions.
"""

from enums.error_kind import ErrorKind
from .base import ValidationException, RemoteFailureException


class PickupDateNotSelectedException(ValidationException):
    """Raised when checking out before a pickup date was chosen."""

    def __init__(self):
        super().__init__("No pickup date selected")


class PickupDateExpiredException(ValidationException):
    """Raised when the selected pickup date is no longer orderable."""

    def __init__(self, pickup_date: int):
        super().__init__(
            f"Pickup date {pickup_date} is no longer available",
            details={'pickup_date': pickup_date}
        )
        self.pickup_date = pickup_date


class EditDeadlinePassedException(ValidationException):
    """Raised when modifying an order after its edit deadline."""

    def __init__(self, order_id: str | None, pickup_date: int | None):
        super().__init__(
            f"Edit deadline passed for order {order_id}",
            details={'order_id': order_id, 'pickup_date': pickup_date}
        )
        self.order_id = order_id
        self.pickup_date = pickup_date


class MissingOrderInfoException(ValidationException):
    """Raised when an order flow runs without a loaded order."""

    def __init__(self, operation: str):
        super().__init__(
            f"No loaded order to {operation}",
            details={'operation': operation}
        )
        self.operation = operation


class OrderNotFoundException(RemoteFailureException):
    """Raised when the remote order document does not exist (anymore)."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, order_id: str, operation: str = "Order lookup"):
        super().__init__(
            operation,
            f"Order {order_id} not found",
            details={'order_id': order_id}
        )
        self.order_id = order_id

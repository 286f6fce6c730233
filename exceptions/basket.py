"""
Basket-related exceptions.
"""

from .base import ValidationException


class EmptyBasketException(ValidationException):
    """Raised when trying to submit or reorder an empty basket."""

    def __init__(self, operation: str = "checkout"):
        super().__init__(
            f"Basket is empty, cannot {operation}",
            details={'operation': operation}
        )
        self.operation = operation


class NothingToReorderException(EmptyBasketException):
    """Raised when reordering without any items in the basket."""

    def __init__(self):
        super().__init__("reorder")


class UserNotAuthenticatedException(ValidationException):
    """Raised when a flow needs a signed-in buyer."""

    def __init__(self):
        super().__init__("User is not signed in")


class NoPendingMergeException(ValidationException):
    """Raised when confirming a merge without an existing order to merge into."""

    def __init__(self):
        super().__init__("No existing order to merge into")

"""
Base exception classes for the basket engine.
"""

from enums.error_kind import ErrorKind


class MarketplaceException(Exception):
    """
    Base exception for all basket and order errors.

    Collaborators return these inside a failed Result instead of raising them,
    the synchronizer surfaces them as a localized error on the screen state.

    Attributes:
        message: Human-readable error message
        details: Optional dict with additional context (order IDs, dates, etc.)
        kind: Error category used to decide how a flow reacts
    """

    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(self, message: str, details: dict | None = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation with context."""
        if self.details:
            details_str = ', '.join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class ValidationException(MarketplaceException):
    """Base exception for preconditions checked before anything is sent."""
    kind = ErrorKind.VALIDATION


class RemoteFailureException(MarketplaceException):
    """Raised when a collaborator call fails."""
    kind = ErrorKind.REMOTE_FAILURE

    def __init__(self, operation: str, reason: str, details: dict | None = None):
        super().__init__(
            f"{operation} failed: {reason}",
            details={'operation': operation, 'reason': reason, **(details or {})}
        )
        self.operation = operation
        self.reason = reason


class OperationInProgressException(MarketplaceException):
    """Raised when a flow is dispatched while the same flow is still running."""
    kind = ErrorKind.IN_PROGRESS

    def __init__(self, flow: str):
        super().__init__(
            f"{flow} is already in progress",
            details={'flow': flow}
        )
        self.flow = flow

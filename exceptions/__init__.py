"""
Custom exceptions for the basket engine.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
MarketplaceException (base)
├── ValidationException
│   ├── EmptyBasketException
│   │   └── NothingToReorderException
│   ├── UserNotAuthenticatedException
│   ├── NoPendingMergeException
│   ├── PickupDateNotSelectedException
│   ├── PickupDateExpiredException
│   ├── EditDeadlinePassedException
│   └── MissingOrderInfoException
├── RemoteFailureException
│   └── OrderNotFoundException
└── OperationInProgressException

Usage:
------
Repositories return failures instead of raising:
    return Result.failure(OrderNotFoundException(order_id))

The synchronizer converts them to localized messages:
    result = await self._orders.place_order(order)
    if not result.is_success:
        error_message = handle_service_error(result.error)
"""

from .base import (
    MarketplaceException,
    ValidationException,
    RemoteFailureException,
    OperationInProgressException
)
from .basket import (
    EmptyBasketException,
    NothingToReorderException,
    UserNotAuthenticatedException,
    NoPendingMergeException
)
from .order import (
    PickupDateNotSelectedException,
    PickupDateExpiredException,
    EditDeadlinePassedException,
    MissingOrderInfoException,
    OrderNotFoundException
)

__all__ = [
    # Base
    'MarketplaceException',
    'ValidationException',
    'RemoteFailureException',
    'OperationInProgressException',

    # Basket
    'EmptyBasketException',
    'NothingToReorderException',
    'UserNotAuthenticatedException',
    'NoPendingMergeException',

    # Order
    'PickupDateNotSelectedException',
    'PickupDateExpiredException',
    'EditDeadlinePassedException',
    'MissingOrderInfoException',
    'OrderNotFoundException',
]

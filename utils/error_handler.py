"""
Error Handler Utility for the basket synchronizer

Provides centralized error handling with:
- Localized error messages
- Automatic exception to message mapping
- Logging for debugging

Usage in flows:
    from utils.error_handler import handle_service_error

    result = await self._orders.place_order(order)
    if not result.is_success:
        error_message = handle_service_error(result.error)
"""

import logging
from typing import Optional

from enums.text_entity import TextEntity
from exceptions import (
    MarketplaceException,
    RemoteFailureException,
    OperationInProgressException,
    EmptyBasketException,
    NothingToReorderException,
    UserNotAuthenticatedException,
    NoPendingMergeException,
    PickupDateNotSelectedException,
    PickupDateExpiredException,
    EditDeadlinePassedException,
    MissingOrderInfoException,
    OrderNotFoundException,
)
from utils.localizator import Localizator

# Map exception types to localization section and key
ERROR_MAPPING: dict[type, tuple[TextEntity, str]] = {
    # Basket exceptions
    EmptyBasketException: (TextEntity.BASKET, "error_empty_basket"),
    NothingToReorderException: (TextEntity.BASKET, "error_nothing_to_reorder"),
    UserNotAuthenticatedException: (TextEntity.BASKET, "error_user_not_authenticated"),
    NoPendingMergeException: (TextEntity.BASKET, "error_no_pending_merge"),

    # Order exceptions
    PickupDateNotSelectedException: (TextEntity.ORDER, "error_pickup_date_not_selected"),
    PickupDateExpiredException: (TextEntity.ORDER, "error_pickup_date_expired"),
    EditDeadlinePassedException: (TextEntity.ORDER, "error_edit_deadline_passed"),
    MissingOrderInfoException: (TextEntity.ORDER, "error_missing_order_info"),
    OrderNotFoundException: (TextEntity.ORDER, "error_order_not_found"),

    # Generic
    RemoteFailureException: (TextEntity.COMMON, "error_remote_failure"),
    OperationInProgressException: (TextEntity.COMMON, "error_operation_in_progress"),
}


def handle_service_error(exception: MarketplaceException, lang: Optional[str] = None) -> str:
    """
    Convert a basket exception to a localized user-friendly error message.

    Subclasses without an own entry use the closest mapped base class,
    so a new RemoteFailureException subtype still gets a sensible text.

    Args:
        exception: The exception carried by a failed Result or a rejected precondition
        lang: Optional language code, defaults to config.LANGUAGE

    Returns:
        Localized error message string
    """
    # Log the error for debugging
    logging.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    mapping = None
    for exception_type in type(exception).__mro__:
        mapping = ERROR_MAPPING.get(exception_type)
        if mapping:
            break

    if not mapping:
        # Unknown exception type - use generic error message
        logging.error(f"Unmapped exception type: {type(exception).__name__}")
        return Localizator.get_text(TextEntity.COMMON, "error_unexpected", lang=lang)

    entity, localization_key = mapping

    # Get exception attributes for formatting
    exception_data = {}
    if hasattr(exception, 'order_id'):
        exception_data['order_id'] = exception.order_id
    if hasattr(exception, 'reason'):
        exception_data['reason'] = exception.reason
    if hasattr(exception, 'operation'):
        exception_data['operation'] = exception.operation

    # Get localized message with formatting
    try:
        return Localizator.get_text(entity, localization_key, lang=lang).format(**exception_data)
    except KeyError as e:
        # Missing formatting parameter - log and return without formatting
        logging.error(f"Missing format parameter in error message: {e}")
        return Localizator.get_text(entity, localization_key, lang=lang)

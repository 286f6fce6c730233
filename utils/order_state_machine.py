"""
Order State Machine for validating order status transitions and maintaining consistency.

This module implements a finite state machine to ensure valid order status transitions
and provide audit logging for all status changes.
"""

import logging
from typing import Dict, List, Optional, Set

from enums.order_status import OrderStatus

logger = logging.getLogger(__name__)


class OrderStatusTransition:
    """Represents a valid status transition with metadata"""

    def __init__(self, from_status: OrderStatus, to_status: OrderStatus, requires_seller: bool = False,
                 description: str = ""):
        self.from_status = from_status
        self.to_status = to_status
        self.requires_seller = requires_seller
        self.description = description

    def __repr__(self):
        seller_flag = " (Seller)" if self.requires_seller else ""
        return f"{self.from_status.value} -> {self.to_status.value}{seller_flag}"


class OrderStateMachine:
    """
    Finite state machine for order status transitions with validation and audit logging.

    Valid status transitions:
    - DRAFT -> PLACED (buyer checks out)
    - PLACED -> LOCKED (edit deadline passed)
    - PLACED -> CANCELLED (buyer cancels before the deadline)
    - LOCKED -> COMPLETED (seller hands the order over)
    - LOCKED -> CANCELLED (seller only)

    Invalid transitions (will be rejected):
    - COMPLETED -> any status (final state)
    - CANCELLED -> any status (final state)
    """

    # Define all valid transitions
    VALID_TRANSITIONS: List[OrderStatusTransition] = [
        # From DRAFT
        OrderStatusTransition(
            OrderStatus.DRAFT,
            OrderStatus.PLACED,
            description="Order placed by buyer"
        ),

        # From PLACED
        OrderStatusTransition(
            OrderStatus.PLACED,
            OrderStatus.LOCKED,
            description="Edit deadline passed"
        ),
        OrderStatusTransition(
            OrderStatus.PLACED,
            OrderStatus.CANCELLED,
            description="Order cancelled by buyer"
        ),

        # From LOCKED
        OrderStatusTransition(
            OrderStatus.LOCKED,
            OrderStatus.COMPLETED,
            requires_seller=True,
            description="Order picked up"
        ),
        OrderStatusTransition(
            OrderStatus.LOCKED,
            OrderStatus.CANCELLED,
            requires_seller=True,
            description="Locked order cancelled by seller"
        ),
    ]

    FINAL_STATUSES: Set[OrderStatus] = {OrderStatus.COMPLETED, OrderStatus.CANCELLED}

    # Build transition map for fast lookup
    _transition_map: Dict[OrderStatus, Set[OrderStatus]] = {}
    _seller_required_transitions: Set[tuple] = set()
    _transition_descriptions: Dict[tuple, str] = {}

    @classmethod
    def _build_transition_map(cls):
        """Build internal transition maps for performance"""
        if cls._transition_map:
            return  # Already built

        for transition in cls.VALID_TRANSITIONS:
            cls._transition_map.setdefault(transition.from_status, set()).add(transition.to_status)

            if transition.requires_seller:
                cls._seller_required_transitions.add((transition.from_status, transition.to_status))

            cls._transition_descriptions[(transition.from_status, transition.to_status)] = transition.description

    @classmethod
    def is_valid_transition(cls, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        """
        Check if a status transition is valid according to the state machine.

        Staying in the same non-final status is allowed (order content updates).
        """
        cls._build_transition_map()

        if from_status == to_status:
            return not cls.is_final_status(from_status)

        return to_status in cls._transition_map.get(from_status, set())

    @classmethod
    def requires_seller(cls, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        cls._build_transition_map()
        return (from_status, to_status) in cls._seller_required_transitions

    @classmethod
    def get_valid_transitions(cls, from_status: OrderStatus) -> List[OrderStatus]:
        cls._build_transition_map()
        return list(cls._transition_map.get(from_status, set()))

    @classmethod
    def get_transition_description(cls, from_status: OrderStatus, to_status: OrderStatus) -> str:
        cls._build_transition_map()
        return cls._transition_descriptions.get(
            (from_status, to_status),
            f"Transition from {from_status.value} to {to_status.value}"
        )

    @classmethod
    def is_final_status(cls, status: OrderStatus) -> bool:
        """
        Check if a status is final (no transitions allowed from it).
        """
        return status in cls.FINAL_STATUSES

    @classmethod
    def validate_and_log_transition(cls, order_id: str, from_status: OrderStatus, to_status: OrderStatus,
                                    seller_id: Optional[str] = None, buyer_id: Optional[str] = None) -> bool:
        """
        Validate a status transition and create audit log entry.

        Args:
            order_id: ID of the order being transitioned
            from_status: Current order status
            to_status: Desired new status
            seller_id: ID of the seller performing the transition (if applicable)
            buyer_id: ID of the buyer performing the transition (if applicable)

        Returns:
            True if transition is valid and logged, False otherwise
        """
        if not cls.is_valid_transition(from_status, to_status):
            logger.error(f"Invalid status transition for order {order_id}: {from_status.value} -> {to_status.value}")
            return False

        if cls.requires_seller(from_status, to_status) and seller_id is None:
            logger.error(f"Seller required for transition {from_status.value} -> {to_status.value} on order {order_id}")
            return False

        transition_desc = cls.get_transition_description(from_status, to_status)
        performer = f"seller {seller_id}" if seller_id else f"buyer {buyer_id}" if buyer_id else "system"

        logger.info(f"ORDER_STATUS_TRANSITION: Order {order_id} {from_status.value} -> {to_status.value} "
                    f"by {performer}: {transition_desc}")
        return True

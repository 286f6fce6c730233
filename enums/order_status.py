from enum import Enum


class OrderStatus(str, Enum):
    DRAFT = "DRAFT"              # Basket not yet submitted
    PLACED = "PLACED"            # Submitted, still editable until the deadline
    LOCKED = "LOCKED"            # Deadline passed, seller is preparing the order
    COMPLETED = "COMPLETED"      # Picked up
    CANCELLED = "CANCELLED"      # Cancelled by buyer or seller

    @property
    def is_editable(self) -> bool:
        return self in (OrderStatus.DRAFT, OrderStatus.PLACED)

    @property
    def is_finalized(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    @property
    def is_active(self) -> bool:
        return self in (OrderStatus.PLACED, OrderStatus.LOCKED)

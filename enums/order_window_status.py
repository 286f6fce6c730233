from enum import Enum


class OrderWindowStatus(str, Enum):
    OPEN = "OPEN"                        # Order can still be placed or edited
    DEADLINE_PASSED = "DEADLINE_PASSED"  # Edit deadline passed, pickup still ahead
    PICKUP_PASSED = "PICKUP_PASSED"      # Pickup day is over

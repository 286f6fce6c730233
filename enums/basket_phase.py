from enum import Enum


class BasketPhase(str, Enum):
    NO_ORDER = "NO_ORDER"
    LOADING = "LOADING"
    VIEWING = "VIEWING"
    EDITING_LOCALLY = "EDITING_LOCALLY"
    CHECKOUT_IN_FLIGHT = "CHECKOUT_IN_FLIGHT"
    MERGE_REQUIRED = "MERGE_REQUIRED"
    PLACED = "PLACED"
    FAILED = "FAILED"

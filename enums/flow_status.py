from enum import Enum


class FlowStatus(str, Enum):
    SUCCESS = "SUCCESS"
    MERGE_REQUIRED = "MERGE_REQUIRED"  # Order exists for the pickup date, user must resolve conflicts
    RECONCILED = "RECONCILED"          # Remote order was gone, local state cleaned up instead
    REJECTED = "REJECTED"              # Same flow already in flight
    FAILED = "FAILED"

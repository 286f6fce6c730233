from enum import Enum


class DeadlineWarningLevel(str, Enum):
    NONE = "NONE"          # More than 48 hours left
    INFO = "INFO"          # 24 - 48 hours
    WARNING = "WARNING"    # 6 - 24 hours
    URGENT = "URGENT"      # 1 - 6 hours
    CRITICAL = "CRITICAL"  # Less than 1 hour
    EXPIRED = "EXPIRED"    # Deadline passed

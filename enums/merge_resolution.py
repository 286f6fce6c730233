from enum import Enum


class MergeResolution(str, Enum):
    UNDECIDED = "UNDECIDED"          # No choice yet, existing quantity wins on confirm
    ADD = "ADD"                      # Sum existing and new quantity
    KEEP_EXISTING = "KEEP_EXISTING"  # Keep the quantity already in the placed order
    USE_NEW = "USE_NEW"              # Replace with the basket quantity

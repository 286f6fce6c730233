from enum import Enum


class FlowKind(str, Enum):
    CHECKOUT = "CHECKOUT"
    UPDATE = "UPDATE"
    CANCEL = "CANCEL"
    REORDER = "REORDER"
    MERGE = "MERGE"
    LOAD = "LOAD"

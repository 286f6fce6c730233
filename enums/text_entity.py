from enum import Enum


class TextEntity(Enum):
    BASKET = 1
    ORDER = 2
    COMMON = 3

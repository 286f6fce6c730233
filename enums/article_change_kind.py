from enum import Enum


class ArticleChangeKind(str, Enum):
    ADDED = "ADDED"
    CHANGED = "CHANGED"
    MOVED = "MOVED"
    REMOVED = "REMOVED"

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"          # Precondition failed locally, nothing was sent
    REMOTE_FAILURE = "REMOTE_FAILURE"  # Collaborator reported an error
    NOT_FOUND = "NOT_FOUND"            # Remote document no longer exists
    IN_PROGRESS = "IN_PROGRESS"        # Same flow already running, request rejected

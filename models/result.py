from typing import Any

from exceptions.base import MarketplaceException


class Result:
    """
    Outcome of a collaborator call: either a value or a MarketplaceException.

    Repositories return failures instead of raising so that every flow can
    decide how to surface them.
    """

    def __init__(self, value: Any = None, error: MarketplaceException | None = None):
        self._value = value
        self._error = error

    @classmethod
    def success(cls, value: Any = None) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, error: MarketplaceException) -> 'Result':
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def value(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._value

    @property
    def error(self) -> MarketplaceException | None:
        return self._error

    def get_or_none(self) -> Any:
        return self._value if self._error is None else None

    def __repr__(self) -> str:
        if self._error is not None:
            return f"Result.failure({self._error!r})"
        return f"Result.success({self._value!r})"

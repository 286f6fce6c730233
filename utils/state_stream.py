"""
Observable holder of the latest value.

Emits synchronously to listeners and asynchronously to subscribers. New
subscribers first receive the current value, equal consecutive values are
not re-emitted.
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Callable

logger = logging.getLogger(__name__)


class StateStream:

    def __init__(self, initial: Any):
        self._value = initial
        self._listeners: list[Callable[[Any], None]] = []
        self._queues: set[asyncio.Queue] = set()

    @property
    def value(self) -> Any:
        return self._value

    def emit(self, value: Any) -> None:
        if value == self._value:
            return
        self._value = value
        for listener in list(self._listeners):
            listener(value)
        for queue in list(self._queues):
            queue.put_nowait(value)

    def add_listener(self, listener: Callable[[Any], None]) -> Callable[[], None]:
        """
        Register a synchronous observer, called in emission order.

        Returns:
            Callable removing the listener again
        """
        self._listeners.append(listener)

        def remove():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    async def subscribe(self) -> AsyncIterator[Any]:
        """
        Async iterator over the current value followed by every later emission.

        Each subscriber gets its own queue, so slow consumers never block
        emitters or other subscribers.
        """
        queue: asyncio.Queue = asyncio.Queue()
        queue.put_nowait(self._value)
        self._queues.add(queue)
        logger.debug(f"Subscriber added ({len(self._queues)} active)")
        try:
            while True:
                yield await queue.get()
        finally:
            self._queues.discard(queue)

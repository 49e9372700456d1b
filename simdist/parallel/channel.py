"""
Multi-producer, single-consumer result channel.

Producers hold ``Sender`` handles; the channel closes once the last handle
is dropped, which ends iteration on the ``Receiver``. A sender dropped by an
exception marks the channel as failed and the receiver raises
``WorkerError`` once it has drained everything that was sent.
"""

import logging
import queue
import threading
from typing import Generic, Iterator, List, Tuple, TypeVar

from ..errors import WorkerError

logger = logging.getLogger(__name__)

T = TypeVar('T')

_CLOSED = object()


class _ChannelState:
    """State shared by every handle of one channel."""

    def __init__(self):
        self.queue: queue.Queue = queue.Queue()
        self.lock = threading.Lock()
        self.senders = 0
        self.errors: List[BaseException] = []


class Sender(Generic[T]):
    """Producer handle. Use as a context manager to guarantee it is dropped."""

    def __init__(self, state: _ChannelState):
        self._state = state
        self._closed = False
        with state.lock:
            state.senders += 1

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item: T) -> None:
        """Send an item to the receiver."""
        if self._closed:
            raise RuntimeError("send on a closed sender")
        self._state.queue.put(item)

    def clone(self) -> "Sender[T]":
        """Create another producer handle for the same channel."""
        if self._closed:
            raise RuntimeError("cannot clone a closed sender")
        return Sender(self._state)

    def close(self) -> None:
        """Drop this handle; the last one closes the channel."""
        with self._state.lock:
            if self._closed:
                return
            self._closed = True
            self._state.senders -= 1
            last = self._state.senders == 0
        if last:
            self._state.queue.put(_CLOSED)

    def fail(self, error: BaseException) -> None:
        """Record a producer failure, then drop this handle."""
        with self._state.lock:
            self._state.errors.append(error)
        self.close()

    def __enter__(self) -> "Sender[T]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val is not None:
            self.fail(exc_val)
        else:
            self.close()
        return False


class Receiver(Generic[T]):
    """Consumer handle. Iterating blocks until the channel closes."""

    def __init__(self, state: _ChannelState):
        self._state = state
        self._drained = False
        self._producers: List[threading.Thread] = []

    def attach(self, producer: threading.Thread) -> None:
        """Join ``producer`` once the channel has closed."""
        self._producers.append(producer)

    def __iter__(self) -> Iterator[T]:
        if self._drained:
            return
        while True:
            item = self._state.queue.get()
            if item is _CLOSED:
                break
            yield item
        for producer in self._producers:
            producer.join()
        self._drained = True
        self._raise_failures()

    def drain(self) -> List[T]:
        """Collect every item until the channel closes."""
        return list(self)

    def _raise_failures(self) -> None:
        errors = list(self._state.errors)
        if errors:
            logger.error(f"{len(errors)} unit(s) of work failed; discarding partial results")
            raise WorkerError(
                f"{len(errors)} unit(s) of work failed: {errors[0]!r}",
                errors=errors
            )


def channel() -> Tuple[Sender, Receiver]:
    """Create a new channel and return its first sender and the receiver."""
    state = _ChannelState()
    return Sender(state), Receiver(state)

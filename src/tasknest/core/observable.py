"""Minimal observer streams used to broadcast service state."""

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Subscription:
    """Handle returned by Observable.subscribe. Unsubscribing twice is harmless."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe: Callable[[], None] | None = unsubscribe

    @property
    def closed(self) -> bool:
        return self._unsubscribe is None

    def unsubscribe(self) -> None:
        if self._unsubscribe is None:
            return
        callback, self._unsubscribe = self._unsubscribe, None
        callback()


class Observable(Generic[T]):
    """Holds a current value and pushes every new value to subscribers.

    A new subscriber receives the current value right away, then every
    value published afterwards, in subscription order.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._observers: dict[int, Callable[[T], None]] = {}
        self._next_key = 0

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, observer: Callable[[T], None]) -> Subscription:
        key = self._next_key
        self._next_key += 1
        self._observers[key] = observer
        observer(self._value)
        return Subscription(lambda: self._observers.pop(key, None))

    def publish(self, value: T) -> None:
        self._value = value
        # Copy so observers may unsubscribe while being notified
        for observer in list(self._observers.values()):
            observer(value)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

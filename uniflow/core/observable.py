"""Single-value broadcast channel.

The controller publishes every state transition here; any number of
observers receive it synchronously, in subscription order.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

from uniflow.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Observer = Callable[[T], None]
Unsubscribe = Callable[[], None]


class ObservableValue(Generic[T]):
    """Holds the current value and fans each new value out to observers.

    Observers must return quickly: they run inline in ``publish``. An observer
    that raises is logged and skipped so one faulty consumer cannot stop the
    others or the publisher.

    Example:
        >>> state = ObservableValue(0)
        >>> seen = []
        >>> unsubscribe = state.subscribe(seen.append)
        >>> state.publish(1)
        >>> unsubscribe()
        >>> state.publish(2)
        >>> seen
        [1]
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._observers: list[tuple[object, Observer[T]]] = []

    @property
    def value(self) -> T:
        """The most recently published value."""
        return self._value

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: Observer[T]) -> Unsubscribe:
        """Register an observer.

        Args:
            observer: Callable invoked with each published value.

        Returns:
            A callable that removes the observer. Calling it more than once
            has no further effect.
        """
        handle = object()
        self._observers.append((handle, observer))

        def unsubscribe() -> None:
            # Keyed by handle; the same callable may be subscribed twice
            self._observers = [
                entry for entry in self._observers if entry[0] is not handle
            ]

        return unsubscribe

    def publish(self, value: T) -> None:
        """Store ``value`` and notify every observer, even if it is unchanged."""
        self._value = value
        # Snapshot so observers may unsubscribe during dispatch
        for _, observer in list(self._observers):
            self._safe_notify(observer, value)

    def _safe_notify(self, observer: Observer[T], value: T) -> None:
        try:
            observer(value)
        except Exception:
            logger.exception(
                "observer_failed",
                observer=getattr(observer, "__qualname__", repr(observer)),
                value_type=type(value).__name__,
            )

"""
In-process notification channels.

A channel keeps its listeners in subscription order and calls them
synchronously on the thread that publishes.
"""
from typing import Callable, Generic, List, Optional, TypeVar


T = TypeVar("T")

Listener = Callable[[T], None]


class Subscription:
    """
    Handle returned by ``EventChannel.subscribe``.

    ``unsubscribe`` may be called any number of times. The handle also
    works as a context manager that unsubscribes on exit.
    """

    def __init__(self, channel: "EventChannel", listener: Listener) -> None:
        self._channel: Optional[EventChannel] = channel
        self.listener = listener

    @property
    def active(self) -> bool:
        return self._channel is not None

    def unsubscribe(self) -> None:
        if self._channel is None:
            return
        self._channel._remove(self)
        self._channel = None

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class EventChannel(Generic[T]):
    """Ordered, multi-subscriber, synchronous event channel."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._subscriptions: List[Subscription] = []

    def subscribe(self, listener: Listener) -> Subscription:
        """
        Register a listener.

        The same callable may be registered more than once; each
        registration gets its own handle and its own call.

        Args:
            listener: Called with the payload of every publish.

        Returns:
            Handle for removing this registration.
        """
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {listener!r}")
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        # Match the registration itself, not the callable
        for index, registered in enumerate(self._subscriptions):
            if registered is subscription:
                del self._subscriptions[index]
                return

    def publish(self, payload: T) -> None:
        """Call every listener with ``payload``; exceptions propagate."""
        for subscription in list(self._subscriptions):
            subscription.listener(payload)

    def __len__(self) -> int:
        return len(self._subscriptions)

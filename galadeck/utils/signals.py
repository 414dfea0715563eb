"""
Minimal observer plumbing: a Signal fans a call out to connected handlers,
and each connection is a Subscription that can be cancelled.
"""

from typing import Callable, List, Optional


class Subscription:
    """Handle for a connected handler. ``cancel()`` is idempotent."""

    def __init__(self, signal: 'Signal', handler: Callable):
        self._signal: Optional['Signal'] = signal
        self.handler = handler

    @property
    def active(self) -> bool:
        return self._signal is not None

    def cancel(self) -> None:
        if self._signal is not None:
            self._signal._discard(self)
            self._signal = None


class Signal:
    """Synchronous multi-handler notification."""

    def __init__(self, name: str = ""):
        self.name = name
        self._subscriptions: List[Subscription] = []

    def connect(self, handler: Callable) -> Subscription:
        subscription = Subscription(self, handler)
        self._subscriptions.append(subscription)
        return subscription

    def connect_once(self, handler: Callable) -> Subscription:
        """Connect a handler that detaches itself before its first call."""
        subscription: Optional[Subscription] = None

        def _once(*args, **kwargs):
            subscription.cancel()
            return handler(*args, **kwargs)

        subscription = self.connect(_once)
        return subscription

    def emit(self, *args, **kwargs) -> None:
        # Handlers may cancel subscriptions while we iterate
        for subscription in list(self._subscriptions):
            if subscription.active:
                subscription.handler(*args, **kwargs)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def _discard(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

"""Subscription scopes for typed Kai events.

Subscribers are kept in an explicit map from (scope, kind) to an ordered
list of callbacks. Delivery copies the list under a lock and invokes the
callbacks outside it, so callbacks may subscribe or unsubscribe freely.
"""
from __future__ import annotations

import logging
import threading
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List, Mapping, Tuple, Union

from .models import DeviceHandle, EventKind, Reading, SDKError

logger = logging.getLogger(__name__)


class Scope(Enum):
    """Delivery targets that are not tied to one Kai id."""
    DEFAULT = "default"
    DEFAULT_LEFT = "default_left"
    DEFAULT_RIGHT = "default_right"
    ANY = "any"


# A Scope member, or a Kai id for the specific-device scope
ScopeKey = Union[Scope, int]

ReadingCallback = Callable[[DeviceHandle, Reading], None]
ErrorCallback = Callable[[SDKError], None]
UnknownDataCallback = Callable[[Mapping[str, Any]], None]


def _check_scope(scope: ScopeKey) -> ScopeKey:
    if isinstance(scope, Scope):
        return scope
    if isinstance(scope, int) and not isinstance(scope, bool) and scope >= 0:
        return scope
    raise ValueError(f"Invalid scope: {scope!r}")


class SubscriptionRegistry:
    """Per-scope, per-kind subscriber lists plus the session-wide sinks."""

    def __init__(self):
        self._subscribers: DefaultDict[Tuple[ScopeKey, EventKind], List[ReadingCallback]] = defaultdict(list)
        self._error_subscribers: List[ErrorCallback] = []
        self._unknown_subscribers: List[UnknownDataCallback] = []
        self._subscriber_lock = threading.Lock()

    def subscribe(
        self,
        scope: ScopeKey,
        kind: EventKind,
        callback: ReadingCallback
    ) -> Callable[[], None]:
        """Subscribe to one kind of reading on one scope.

        Args:
            scope: Scope member, or a Kai id for that Kai only
            kind: Which readings to receive
            callback: Called with the Kai handle and the reading

        Returns:
            Unsubscribe function to remove this callback

        Example:
            >>> def on_gesture(kai, reading):
            ...     print(f"Kai {kai.kai_id}: {reading.gesture}")
            >>> unsubscribe = subscriptions.subscribe(Scope.ANY, EventKind.GESTURE, on_gesture)
            >>> # Later...
            >>> unsubscribe()
        """
        if not isinstance(kind, EventKind):
            raise ValueError(f"Invalid event kind: {kind!r}")
        key = (_check_scope(scope), kind)
        return self._add(lambda: self._subscribers[key], callback)

    def subscribe_error(self, callback: ErrorCallback) -> Callable[[], None]:
        """Subscribe to errors reported by the service."""
        return self._add(lambda: self._error_subscribers, callback)

    def subscribe_unknown_data(self, callback: UnknownDataCallback) -> Callable[[], None]:
        """Subscribe to envelopes the SDK does not recognise."""
        return self._add(lambda: self._unknown_subscribers, callback)

    def deliver(self, scope: ScopeKey, kind: EventKind, device: DeviceHandle, reading: Reading) -> int:
        """Invoke every callback subscribed to (scope, kind), in subscription order.

        Returns:
            Number of callbacks that completed without raising
        """
        with self._subscriber_lock:
            callbacks = list(self._subscribers.get((scope, kind), ()))
        return self._notify(callbacks, device, reading)

    def deliver_error(self, error: SDKError) -> int:
        with self._subscriber_lock:
            callbacks = list(self._error_subscribers)
        return self._notify(callbacks, error)

    def deliver_unknown_data(self, body: Mapping[str, Any]) -> int:
        with self._subscriber_lock:
            callbacks = list(self._unknown_subscribers)
        return self._notify(callbacks, body)

    def subscriber_count(self, scope: ScopeKey, kind: EventKind) -> int:
        with self._subscriber_lock:
            return len(self._subscribers.get((scope, kind), ()))

    def _add(self, target: Callable[[], list], callback: Callable) -> Callable[[], None]:
        if not callable(callback):
            raise TypeError(f"Callback must be callable, got {callback!r}")

        with self._subscriber_lock:
            target().append(callback)

        def unsubscribe():
            with self._subscriber_lock:
                callbacks = target()
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    @staticmethod
    def _notify(callbacks: List[Callable], *args) -> int:
        delivered = 0
        for callback in callbacks:
            try:
                callback(*args)
                delivered += 1
            except Exception:
                logger.exception(f"Error in subscriber {callback!r}")
        return delivered

# src/todo_tracker/core/observable.py

from __future__ import annotations

import contextlib
import logging
import threading
from typing import Generic, TypeVar

from .ports import Observer, Unsubscribe

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ObservableValue(Generic[T]):
    """
    Holds one current value and pushes every replacement to subscribers.

    - subscribe() replays the current value immediately, then every later one
    - set() replaces the value as a whole; subscribers never see partial updates
    - delivery happens under a lock, so two set() calls cannot interleave
      their notifications
    - a failing subscriber is logged and skipped; the others still get the value
    - an owner may pass its own lock, so that replay and delivery run under the
      same lock as the owner's state (one lock, one order)

    Usage:
        tasks = ObservableValue(())
        unsubscribe = tasks.subscribe(render)
        tasks.set(new_tasks)
        unsubscribe()
    """

    def __init__(self, initial: T, *, lock: threading.RLock | None = None) -> None:
        self._value = initial
        self._observers: list[Observer[T]] = []
        self._version = 0
        # Must be re-entrant: an observer may read or set the value while being notified.
        self._lock = lock if lock is not None else threading.RLock()

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: Observer[T], *, replay: bool = True) -> Unsubscribe:
        with self._lock:
            self._observers.append(observer)
            if replay:
                self._notify_one(observer, self._value)

        def _unsubscribe() -> None:
            self.unsubscribe(observer)

        return _unsubscribe

    def unsubscribe(self, observer: Observer[T]) -> None:
        with self._lock:
            with contextlib.suppress(ValueError):
                self._observers.remove(observer)

    def set(self, value: T) -> None:
        with self._lock:
            self._value = value
            self._version += 1
            version = self._version
            # Snapshot: observers may unsubscribe themselves during delivery.
            for observer in list(self._observers):
                if self._version != version:
                    # A nested set() already delivered a newer value to everyone.
                    break
                self._notify_one(observer, value)

    @staticmethod
    def _notify_one(observer: Observer[T], value: T) -> None:
        try:
            observer(value)
        except Exception:
            logger.exception("Observer %r failed", observer)

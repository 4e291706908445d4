"""Synchronous event emitters with disposable subscriptions."""

from __future__ import annotations

from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class Subscription:
    """Handle returned by ``EventEmitter.subscribe``; usable as a context manager."""

    def __init__(self, dispose: Callable[[], None]) -> None:
        self._dispose: Optional[Callable[[], None]] = dispose

    @property
    def disposed(self) -> bool:
        return self._dispose is None

    def dispose(self) -> None:
        if self._dispose is None:
            return
        release, self._dispose = self._dispose, None
        release()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.dispose()
        return False


class EventEmitter(Generic[T]):
    """Delivers each fired payload to current listeners, in subscription order."""

    def __init__(self, name: str = "event") -> None:
        self.name = name
        self._listeners: List[Listener[T]] = []

    def subscribe(self, listener: Listener[T]) -> Subscription:
        self._listeners.append(listener)
        return Subscription(lambda: self._remove(listener))

    def fire(self, payload: T) -> None:
        # listeners may unsubscribe while we deliver
        for listener in list(self._listeners):
            listener(payload)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _remove(self, listener: Listener[T]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass


__all__ = ["EventEmitter", "Listener", "Subscription"]

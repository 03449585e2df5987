"""Keyed request coalescing for blocking calls."""

from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class _Call(Generic[T]):
    __slots__ = ("done", "result", "error", "waiters")

    def __init__(self) -> None:
        self.done = threading.Event()
        self.result: Optional[T] = None
        self.error: Optional[BaseException] = None
        self.waiters = 0


class Inflight(Generic[T]):
    """
    Run at most one call per key at a time.

    A caller arriving while a call for the same key is running blocks until
    that call finishes and receives its result (or its exception) instead of
    starting a second one. Nothing is cached once the call completes.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, _Call[T]] = {}

    def run(self, key: str, func: Callable[[], T]) -> T:
        with self._lock:
            call = self._calls.get(key)
            if call is not None:
                call.waiters += 1
                leader = False
            else:
                call = _Call()
                self._calls[key] = call
                leader = True

        if not leader:
            call.done.wait()
            if call.error is not None:
                raise call.error
            return call.result  # type: ignore[return-value]

        try:
            call.result = func()
        except BaseException as exc:
            call.error = exc
            raise
        finally:
            with self._lock:
                self._calls.pop(key, None)
            call.done.set()
        return call.result

    def is_running(self, key: str) -> bool:
        with self._lock:
            return key in self._calls

    def waiting(self, key: str) -> int:
        """Number of callers blocked on the running call for key."""
        with self._lock:
            call = self._calls.get(key)
            return call.waiters if call is not None else 0

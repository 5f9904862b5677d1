"""Shared playhead advanced by every display channel at once."""
from __future__ import annotations

import threading


class Playhead:
    """Monotonic counter guarded by its own lock.

    Wraparound is left to callers since each channel has its own catalog size.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("Playhead cannot start below zero")
        self._value = start
        self._lock = threading.Lock()

    def advance(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def current(self) -> int:
        with self._lock:
            return self._value

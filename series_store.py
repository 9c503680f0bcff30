from __future__ import annotations

import threading
from typing import List, Tuple

Point = Tuple[float, float]


class SeriesStore:
    """Arrival-ordered list of points shared between the reader thread and the UI.

    One thread writes (append/clear), any number read (snapshot). Every
    operation holds the lock, so a snapshot sees the list either before or
    after a given append/clear, never in between.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._points: List[Point] = []

    def append(self, point: Point) -> None:
        x, y = point
        with self._lock:
            self._points.append((float(x), float(y)))

    def clear(self) -> None:
        with self._lock:
            self._points.clear()

    def snapshot(self) -> List[Point]:
        """Copy of the current series; safe to iterate without the lock."""
        with self._lock:
            return list(self._points)

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)

"""
Bounded trend history

Keeps the most recent chart points in insertion order and evicts the oldest
once the capacity is reached.
"""

from collections import deque
from typing import Dict, Iterable, Optional, Tuple
import numpy as np

from ..core.data_types import HistoryPoint
from ..core.exceptions import ConfigurationError

SERIES_FIELDS = ("focus", "stress", "heart_rate")


def series_of(points: Iterable[HistoryPoint]) -> Dict[str, object]:
    """Split ordered history points into a label list and one array per field"""
    points = tuple(points)
    series = {"timestamp": [p.timestamp for p in points]}
    for name in SERIES_FIELDS:
        series[name] = np.array([getattr(p, name) for p in points], dtype=float)
    return series


class HistoryBuffer:
    """
    FIFO buffer of HistoryPoint with a fixed maximum length

    Appends are always accepted; when full, the oldest point is dropped
    before the new one is stored.
    """

    def __init__(self, capacity: int, points: Iterable[HistoryPoint] = ()):
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise ConfigurationError(f"History capacity must be a positive integer, got {capacity}")
        self.capacity = capacity
        self._points = deque(maxlen=capacity)
        for point in points:
            self.append(point)

    def append(self, point: HistoryPoint) -> None:
        self._points.append(point)

    def snapshot(self) -> Tuple[HistoryPoint, ...]:
        """Read-only ordered view, oldest first"""
        return tuple(self._points)

    def latest(self) -> Optional[HistoryPoint]:
        return self._points[-1] if self._points else None

    def clear(self) -> None:
        self._points.clear()

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(self.snapshot())

    def as_series(self) -> Dict[str, object]:
        """
        Column view of the buffer for charting

        Returns:
            dict: ``timestamp`` -> list of labels, and one float array per
            charted field (focus, stress, heart_rate)
        """
        return series_of(self.snapshot())

    def trend(self, name: str) -> Optional[float]:
        """
        Percent change of a field between the two most recent points

        Returns None with fewer than two points or when the older value is zero.
        """
        if name not in SERIES_FIELDS:
            raise KeyError(f"Unknown history field: {name}")
        if len(self._points) < 2:
            return None
        previous = getattr(self._points[-2], name)
        current = getattr(self._points[-1], name)
        if previous == 0:
            return None
        return round((current - previous) / previous * 100.0, 1)

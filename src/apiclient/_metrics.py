import threading
import time
from collections import deque
from typing import Callable, Deque

from ._utils.constants import METRICS_WINDOW_SECONDS
from .models.metrics import MetricsSnapshot


class MetricsAggregator:
    """Thread-safe request counters plus a rolling window of start times.

    Every read and write happens under a single lock, so concurrent fetches
    never race on the counters and readers never observe a half-applied
    update. ``successful + failed <= total`` holds at all times because an
    outcome is only recorded for a request that was recorded as started.

    The timestamp history is pruned in place: each rate query drops the
    entries that fell out of the trailing window.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        window: float = METRICS_WINDOW_SECONDS,
    ) -> None:
        self._clock = clock
        self._window = window
        self._lock = threading.Lock()
        self._total = 0
        self._successful = 0
        self._failed = 0
        self._timestamps: Deque[float] = deque()

    def record_started(self) -> None:
        with self._lock:
            self._total += 1
            self._timestamps.append(self._clock())

    def record_outcome(self, success: bool) -> None:
        with self._lock:
            if success:
                self._successful += 1
            else:
                self._failed += 1

    def total_count(self) -> int:
        with self._lock:
            return self._total

    def successful_count(self) -> int:
        with self._lock:
            return self._successful

    def failed_count(self) -> int:
        with self._lock:
            return self._failed

    def requests_per_minute(self) -> float:
        """Number of requests started within the window, as a float.

        This is the raw count inside the trailing window, not a rate
        normalized to some other unit.
        """
        with self._lock:
            return self._requests_in_window()

    def success_rate(self) -> float:
        """Percentage of successful requests, ``0.0`` before any request."""
        with self._lock:
            return self._success_rate()

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            return MetricsSnapshot(
                total_requests=self._total,
                successful_requests=self._successful,
                failed_requests=self._failed,
                requests_per_minute=self._requests_in_window(),
                success_rate=self._success_rate(),
            )

    def reset(self) -> None:
        with self._lock:
            self._total = 0
            self._successful = 0
            self._failed = 0
            self._timestamps.clear()

    # caller must hold self._lock
    def _requests_in_window(self) -> float:
        cutoff = self._clock() - self._window
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()
        return float(len(self._timestamps))

    def _success_rate(self) -> float:
        if self._total == 0:
            return 0.0
        return 100.0 * self._successful / self._total

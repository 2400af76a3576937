# -*- coding: utf-8 -*-
"""Auth request telemetry.

One tracker lives on ``app.state`` for the lifetime of the application and
is dropped on shutdown; nothing here is module-global.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthStats:
    total: int
    recent: int
    sources: List[str]


class AuthRequestTracker:
    """Counts authentication attempts and flags bursts.

    Updated from both the event loop (auth gate middleware) and threadpool
    endpoints, so every read and write of the counters holds ``_lock``.
    """

    def __init__(
        self,
        *,
        window_sec: float = 10.0,
        burst_threshold: int = 10,
        history_size: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window_sec = float(window_sec)
        self.burst_threshold = int(burst_threshold)
        self._clock = clock
        self._lock = threading.Lock()
        self._total = 0
        self._history: Deque[Tuple[float, str]] = deque(maxlen=max(1, int(history_size)))

    def _recent(self, now: float) -> List[Tuple[float, str]]:
        return [item for item in self._history if now - item[0] < self.window_sec]

    def track(self, source: str) -> int:
        with self._lock:
            now = self._clock()
            self._total += 1
            self._history.append((now, source))
            total = self._total
            recent = len(self._recent(now))
            last_sources = ", ".join(s for _, s in list(self._history)[-5:])

        if recent > self.burst_threshold:
            logger.warning(
                "High auth request frequency detected: %d requests in the last %.0f seconds (last sources: %s)",
                recent,
                self.window_sec,
                last_sources,
            )
        return total

    def stats(self) -> AuthStats:
        with self._lock:
            now = self._clock()
            return AuthStats(
                total=self._total,
                recent=len(self._recent(now)),
                sources=[s for _, s in list(self._history)[-10:]],
            )

    def is_bursting(self) -> bool:
        with self._lock:
            return len(self._recent(self._clock())) > self.burst_threshold

    def reset(self) -> None:
        with self._lock:
            self._total = 0
            self._history.clear()

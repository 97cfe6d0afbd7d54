from __future__ import annotations

from threading import Lock


class UsageCounter:
    """Per-endpoint invocation counts shared by all request handlers."""

    def __init__(self):
        self._counts: dict[str, int] = {}
        self._lock = Lock()

    def increment(self, endpoint: str):
        with self._lock:
            self._counts[endpoint] = self._counts.get(endpoint, 0) + 1

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

"""
Scan history for WalletTool
Bounded result cache and run metrics, passed explicitly to the scanner
"""

import threading
import time
from typing import Dict, Hashable, Optional


class ScanCache:
    """Keeps recent dump results, evicting the oldest entry when full"""

    def __init__(self, max_entries: int = 1000):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: Dict[Hashable, tuple] = {}  # key -> (timestamp, result)
        self._lock = threading.Lock()

    def store(self, key: Hashable, result):
        """Cache a result, dropping the oldest entry if the cache is full"""
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_entries:
                oldest = min(self._entries, key=lambda k: self._entries[k][0])
                del self._entries[oldest]
            self._entries[key] = (time.monotonic(), result)

    def retrieve(self, key: Hashable) -> Optional[object]:
        with self._lock:
            entry = self._entries.get(key)
            return entry[1] if entry else None

    def __contains__(self, key):
        with self._lock:
            return key in self._entries

    def __len__(self):
        with self._lock:
            return len(self._entries)


class MetricsCollector:
    """Named counters for a run"""

    def __init__(self):
        self._metrics: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment(self, metric: str, amount: int = 1):
        with self._lock:
            self._metrics[metric] = self._metrics.get(metric, 0) + amount

    def get(self, metric: str) -> int:
        with self._lock:
            return self._metrics.get(metric, 0)

    def reset(self):
        with self._lock:
            self._metrics.clear()

    def snapshot(self) -> Dict[str, int]:
        """Copy of all counters"""
        with self._lock:
            return dict(self._metrics)

"""
Thread-safe in-memory TTL slot for fetched dashboard inputs.

Only raw upstream collections are cached. Metrics are always recompiled from them
with a fresh clock, so a cache hit never changes what a from-scratch run would produce.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Optional, Tuple

from radar.models import DashboardInputs

logger = logging.getLogger(__name__)


class InputsCache:
    def __init__(self, ttl_seconds: int = 300) -> None:
        self.ttl_seconds = ttl_seconds
        self._lock = threading.Lock()
        self._entry: Optional[Tuple[DashboardInputs, float]] = None

    def get(self) -> Optional[DashboardInputs]:
        now = time.time()
        with self._lock:
            if self._entry is None:
                return None
            inputs, ts = self._entry
            if now - ts < self.ttl_seconds:
                return inputs
            self._entry = None
            logger.debug("Cached dashboard inputs expired after %.1fs", now - ts)
            return None

    def set(self, inputs: DashboardInputs) -> None:
        with self._lock:
            self._entry = (inputs, time.time())

    def clear(self) -> None:
        with self._lock:
            self._entry = None

    def snapshot(self) -> Dict[str, object]:
        """Return a lightweight view for health endpoints without exposing payload content."""
        now = time.time()
        entry = None
        with self._lock:
            if self._entry is not None:
                inputs, ts = self._entry
                age = now - ts
                if age < self.ttl_seconds:
                    entry = {
                        "age_seconds": round(age, 2),
                        "articles": len(inputs.articles),
                        "trends": len(inputs.trends),
                        "insights": len(inputs.insights),
                    }
                else:
                    self._entry = None
        return {
            "ttl_seconds": self.ttl_seconds,
            "entry": entry,
        }

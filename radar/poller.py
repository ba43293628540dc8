"""
APScheduler job that refreshes the cached dashboard inputs on a fixed cadence.
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import List, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from radar.cache import InputsCache
from radar.client import DashboardClient
from radar.models import DashboardInputs, FetchStatus

logger = logging.getLogger(__name__)

JOB_ID = "refresh_dashboard_inputs"


class InputsPoller:
    def __init__(self, client: DashboardClient, cache: InputsCache, interval_seconds: int = 300) -> None:
        self.client = client
        self.cache = cache
        self.interval_seconds = interval_seconds
        self._scheduler: Optional[BackgroundScheduler] = None
        self._lock = threading.Lock()
        self._last_statuses: List[FetchStatus] = []
        self.last_refresh: Optional[datetime] = None

    def refresh(self) -> DashboardInputs:
        inputs = self.client.fetch_all(datetime.now(timezone.utc))
        self.cache.set(inputs)
        with self._lock:
            self._last_statuses = list(inputs.statuses)
            self.last_refresh = inputs.fetched_at
        return inputs

    def _job(self) -> None:
        try:
            self.refresh()
        except Exception as exc:  # pragma: no cover - keep the scheduler alive
            logger.error("Scheduled dashboard refresh failed: %s", exc, exc_info=True)

    def start(self) -> None:
        if self._scheduler is not None:
            return
        scheduler = BackgroundScheduler(timezone="UTC")
        scheduler.add_job(
            self._job,
            "interval",
            seconds=self.interval_seconds,
            id=JOB_ID,
            next_run_time=datetime.now(timezone.utc),
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Dashboard poller started (every %ss)", self.interval_seconds)

    def shutdown(self) -> None:
        if self._scheduler is None:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Dashboard poller stopped")

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    def last_statuses(self) -> List[FetchStatus]:
        with self._lock:
            return list(self._last_statuses)

"""
Public API for the TrendRadar dashboard analytics.
"""
from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from radar.cache import InputsCache
from radar.client import DashboardClient
from radar.dashboard import DashboardMetricsCompiler
from radar.models import Article, DashboardInputs, DashboardMetrics, Insight, Trend
from radar.poller import InputsPoller
from radar.sections import HomeSections, build_home_sections
from radar.settings import RadarSettings, load_settings
from radar.status import build_status

SETTINGS: RadarSettings = load_settings()
_compiler = DashboardMetricsCompiler()
_client = DashboardClient(
    SETTINGS.api_base_url,
    timeout=SETTINGS.request_timeout,
    max_retries=SETTINGS.max_retries,
)
_cache = InputsCache(ttl_seconds=SETTINGS.cache_ttl_seconds)
_poller = InputsPoller(_client, _cache, interval_seconds=SETTINGS.poll_interval_seconds)
_refresh_lock = threading.Lock()


def compile_dashboard(
    articles: Sequence[Article],
    trends: Sequence[Trend] = (),
    insights: Sequence[Insight] = (),
    now: Optional[datetime] = None,
) -> DashboardMetrics:
    """Compile every dashboard metric from in-memory collections."""
    return _compiler.compile(articles, trends, insights, now=now or datetime.now(timezone.utc))


def get_inputs(force_refresh: bool = False) -> DashboardInputs:
    """Cached upstream collections, fetched again when stale or when ``force_refresh`` is set."""
    if not force_refresh:
        cached = _cache.get()
        if cached is not None:
            return cached
    # One fetch at a time; requests that queued behind it reuse its result.
    with _refresh_lock:
        if not force_refresh:
            cached = _cache.get()
            if cached is not None:
                return cached
        return _poller.refresh()


def get_dashboard(force_refresh: bool = False, now: Optional[datetime] = None) -> DashboardMetrics:
    inputs = get_inputs(force_refresh)
    return compile_dashboard(inputs.articles, inputs.trends, inputs.insights, now=now)


def get_home_sections(force_refresh: bool = False) -> HomeSections:
    return build_home_sections(get_inputs(force_refresh).articles)


def start_polling() -> None:
    _poller.start()


def stop_polling() -> None:
    _poller.shutdown()


def get_status() -> Dict[str, Any]:
    return build_status(_poller.last_statuses(), _cache, SETTINGS, poller_running=_poller.running)


__all__ = [
    "SETTINGS",
    "compile_dashboard",
    "get_inputs",
    "get_dashboard",
    "get_home_sections",
    "get_status",
    "start_polling",
    "stop_polling",
]

"""
Status/health payload for the dashboard backend.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List

from radar.cache import InputsCache
from radar.models import FetchStatus
from radar.payload import status_to_dict
from radar.settings import RadarSettings


def build_status(statuses: List[FetchStatus], cache: InputsCache, settings: RadarSettings, *, poller_running: bool) -> Dict[str, Any]:
    health = [status_to_dict(entry) for entry in statuses]
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "upstream": {
            "health": health,
            "healthy": bool(health) and all(entry["healthy"] for entry in health),
            "base_url": settings.api_base_url,
        },
        "poller": {
            "running": poller_running,
            "interval_seconds": settings.poll_interval_seconds,
        },
        "cache": cache.snapshot(),
        "config": {
            "request_timeout": settings.request_timeout,
            "max_retries": settings.max_retries,
            "cache_ttl_seconds": settings.cache_ttl_seconds,
        },
    }

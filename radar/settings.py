"""
Centralised settings for the dashboard backend (env-first, code-light).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001"


@dataclass
class RadarSettings:
    api_base_url: str
    request_timeout: int
    max_retries: int
    poll_interval_seconds: int
    cache_ttl_seconds: int
    poll_enabled: bool


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(raw)
        return value if value > 0 else default
    except ValueError:
        logger.warning("Invalid int value for %s=%s; using default %s", key, raw, default)
        return default


def _bool_from_env(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    logger.warning("Invalid boolean value for %s=%s; using default %s", key, raw, default)
    return default


def load_settings() -> RadarSettings:
    base_url = os.getenv("RADAR_API_URL") or os.getenv("BACKEND_API_URL") or DEFAULT_API_URL
    return RadarSettings(
        api_base_url=base_url.rstrip("/"),
        request_timeout=_int_from_env("RADAR_REQUEST_TIMEOUT", 15),
        max_retries=_int_from_env("RADAR_MAX_RETRIES", 3),
        poll_interval_seconds=_int_from_env("RADAR_POLL_INTERVAL", 300),
        cache_ttl_seconds=_int_from_env("RADAR_CACHE_TTL", 300),
        poll_enabled=_bool_from_env("RADAR_POLL_ENABLED", False),
    )

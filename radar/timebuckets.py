"""
Recency bucketing of publication timestamps relative to an injected clock.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from radar.models import FreshnessTier

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

RECENT_HOURS = 6
TODAY_HOURS = 24
YESTERDAY_HOURS = 48
DAILY_WINDOW_DAYS = 7


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def daily_label(days_ago: int) -> str:
    if days_ago == 0:
        return "Today"
    if days_ago == 1:
        return "Yesterday"
    return f"{days_ago} days ago"


class TimeBucketer:
    """
    Buckets timestamps relative to ``now``.

    Every method accepts ``None`` (a missing or unparseable timestamp) and answers ``None``,
    so such articles drop out of all time-based aggregations without raising.
    """

    def __init__(self, now: datetime) -> None:
        self.now = ensure_utc(now)

    def _elapsed_seconds(self, published: Optional[datetime]) -> Optional[float]:
        if published is None:
            return None
        return (self.now - ensure_utc(published)).total_seconds()

    def hours_ago(self, published: Optional[datetime]) -> Optional[float]:
        elapsed = self._elapsed_seconds(published)
        if elapsed is None:
            return None
        return elapsed / SECONDS_PER_HOUR

    def days_ago(self, published: Optional[datetime]) -> Optional[int]:
        elapsed = self._elapsed_seconds(published)
        if elapsed is None:
            return None
        return math.floor(elapsed / SECONDS_PER_DAY)

    def freshness_tier(self, published: Optional[datetime]) -> Optional[FreshnessTier]:
        hours = self.hours_ago(published)
        if hours is None:
            return None
        if hours < RECENT_HOURS:
            return FreshnessTier.RECENT
        if hours < TODAY_HOURS:
            return FreshnessTier.TODAY
        if hours < YESTERDAY_HOURS:
            return FreshnessTier.YESTERDAY
        return FreshnessTier.OLDER

    def daily_bucket(self, published: Optional[datetime]) -> Optional[int]:
        days = self.days_ago(published)
        if days is None or days < 0 or days > DAILY_WINDOW_DAYS:
            return None
        return days

    def hourly_bucket(self, published: Optional[datetime]) -> Optional[int]:
        if published is None:
            return None
        return ensure_utc(published).hour

    def is_within_hours(self, published: Optional[datetime], hours: float) -> bool:
        elapsed = self.hours_ago(published)
        return elapsed is not None and elapsed < hours

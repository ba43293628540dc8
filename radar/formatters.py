"""
Display helpers for article lists.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Tuple
from urllib.parse import quote

from radar.timebuckets import ensure_utc

PLACEHOLDER_BASE_URL = "https://placehold.co/800x450"
DEFAULT_PLACEHOLDER_TEXT = "TrendRadar"
DEFAULT_PLACEHOLDER_COLORS = ("374151", "1f2937")

SOURCE_COLORS: Dict[str, Tuple[str, str]] = {
    "TechCrunch": ("22c55e", "16a34a"),
    "Hacker News": ("f97316", "ea580c"),
    "Dev.to": ("6366f1", "4f46e5"),
    "The Verge": ("ec4899", "db2777"),
    "Ars Technica": ("0ea5e9", "0284c7"),
}


def format_time_ago(published: Optional[datetime], now: datetime) -> str:
    """Render "Just now", "5 min ago", "3 hrs ago", "2 days ago" or a short date like "Mar 4"."""
    if published is None:
        return ""
    published = ensure_utc(published)
    seconds = int((ensure_utc(now) - published).total_seconds())
    if seconds < 60:
        return "Just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} min ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hr{'s' if hours > 1 else ''} ago"
    days = hours // 24
    if days < 7:
        return f"{days} day{'s' if days > 1 else ''} ago"
    return f"{published.strftime('%b')} {published.day}"


def placeholder_image(source: Optional[str]) -> str:
    first, second = SOURCE_COLORS.get(source or "", DEFAULT_PLACEHOLDER_COLORS)
    text = quote(source or DEFAULT_PLACEHOLDER_TEXT, safe="")
    return f"{PLACEHOLDER_BASE_URL}/{first}/{second}?text={text}"


def truncate_text(text: Optional[str], max_length: int = 100) -> Optional[str]:
    if not text or len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."

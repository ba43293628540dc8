"""
Core data structures shared by the dashboard analytics engine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

OTHER_CATEGORY = "Other"
UNKNOWN_SOURCE = "Unknown"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class TrendDirection(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


class FreshnessTier(str, Enum):
    RECENT = "recent"
    TODAY = "today"
    YESTERDAY = "yesterday"
    OLDER = "older"


class ImpactTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class Article:
    """
    Normalized article as handed over by the fetch layer.

    ``published`` is ``None`` when the upstream timestamp was missing or could not be parsed.
    """

    title: str
    source: str
    url: Optional[str] = None
    category: Optional[str] = None
    published: Optional[datetime] = None
    image: Optional[str] = None
    sentiment: Sentiment = Sentiment.NEUTRAL
    content: Optional[str] = None

    @property
    def category_label(self) -> str:
        return self.category or OTHER_CATEGORY

    @property
    def display_label(self) -> str:
        return self.category or self.source or OTHER_CATEGORY

    @property
    def source_label(self) -> str:
        return self.source or UNKNOWN_SOURCE


@dataclass
class Trend:
    topic: str
    mentions: int
    sentiment: Sentiment = Sentiment.NEUTRAL
    keywords: List[str] = field(default_factory=list)
    articles: List[str] = field(default_factory=list)


@dataclass
class Insight:
    topic: str
    summary: str
    sentiment: Sentiment = Sentiment.NEUTRAL
    article_count: int = 0
    impact_score: float = 0
    trend_direction: Optional[TrendDirection] = None
    keywords: List[str] = field(default_factory=list)


@dataclass
class KeyCount:
    key: str
    count: int
    percentage: int = 0


@dataclass
class DailyBucket:
    days_ago: int
    label: str
    count: int


@dataclass
class CategorySentimentRow:
    category: str
    positive: int = 0
    neutral: int = 0
    negative: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.neutral + self.negative


@dataclass
class TrendBar:
    rank: int
    topic: str
    mentions: int
    sentiment: Sentiment
    bar_percentage: int


@dataclass
class SourcePerformance:
    source: str
    count: int = 0
    with_images: int = 0
    categories: List[str] = field(default_factory=list)
    share: int = 0


@dataclass
class DashboardOverview:
    total_articles: int
    total_trends: int
    source_count: int


@dataclass
class DashboardMetrics:
    """
    Every derived structure the analysis view renders, computed in one pass.
    """

    generated_at: datetime
    overview: DashboardOverview
    trends: List[Trend]
    insights: List[Insight]
    trends_synthesized: bool
    insights_synthesized: bool
    category_distribution: List[KeyCount]
    sentiment_distribution: List[KeyCount]
    hourly_histogram: List[int]
    daily_histogram: List[DailyBucket]
    freshness: List[KeyCount]
    momentum: List[KeyCount]
    impact_tiers: List[KeyCount]
    top_keywords: List[KeyCount]
    category_sentiment_matrix: List[CategorySentimentRow]
    top_trending: List[TrendBar]
    source_performance: List[SourcePerformance]


@dataclass
class FetchStatus:
    name: str
    healthy: bool
    last_error: Optional[str] = None
    last_success: Optional[datetime] = None
    items_last_fetch: int = 0
    latency_ms: Optional[float] = None
    extra: Dict[str, str] = field(default_factory=dict)


@dataclass
class DashboardInputs:
    """Raw collections from one fetch cycle; any of them may be empty."""

    articles: List[Article]
    trends: List[Trend]
    insights: List[Insight]
    fetched_at: datetime
    statuses: List[FetchStatus] = field(default_factory=list)

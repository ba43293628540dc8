"""
Pydantic models for raw upstream payloads.

This is the only place where loosely shaped JSON crosses into the typed core: every
optional field gets its documented default here, and nothing downstream re-checks shapes.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from radar.models import Article, Insight, Sentiment, Trend, TrendDirection

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseModel)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO-8601 string (``Z`` suffix allowed) or epoch seconds -> aware UTC datetime, else ``None``."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Discarding out-of-range timestamp %r", value)
            return None
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Discarding unparseable timestamp %r", value)
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        logger.debug("Discarding out-of-range timestamp %r", value)
        return None


def _coerce_sentiment(value: Any) -> Sentiment:
    if isinstance(value, Sentiment):
        return value
    if isinstance(value, str):
        try:
            return Sentiment(value.strip().lower())
        except ValueError:
            pass
    return Sentiment.NEUTRAL


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None and str(item).strip()]


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ArticlePayload(_Payload):
    title: str = ""
    source: str = ""
    url: Optional[str] = None
    category: Optional[str] = None
    published: Optional[datetime] = None
    image: Optional[str] = None
    sentiment: Sentiment = Sentiment.NEUTRAL
    content: Optional[str] = None

    @field_validator("title", "source", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("url", "category", "image", "content", mode="before")
    @classmethod
    def _optional(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("published", mode="before")
    @classmethod
    def _published(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @field_validator("sentiment", mode="before")
    @classmethod
    def _sentiment(cls, value: Any) -> Sentiment:
        return _coerce_sentiment(value)

    def to_article(self) -> Article:
        return Article(
            title=self.title,
            source=self.source,
            url=self.url,
            category=self.category,
            published=self.published,
            image=self.image,
            sentiment=self.sentiment,
            content=self.content,
        )


class TrendPayload(_Payload):
    topic: str
    mentions: int = 1
    sentiment: Sentiment = Sentiment.NEUTRAL
    keywords: List[str] = Field(default_factory=list)
    articles: List[str] = Field(default_factory=list)

    @field_validator("topic", mode="before")
    @classmethod
    def _topic(cls, value: Any) -> str:
        text = _optional_text(value)
        if not text:
            raise ValueError("topic is required")
        return text

    @field_validator("mentions", mode="before")
    @classmethod
    def _mentions(cls, value: Any) -> int:
        try:
            return max(1, int(value))
        except (TypeError, ValueError, OverflowError):
            return 1

    @field_validator("sentiment", mode="before")
    @classmethod
    def _sentiment(cls, value: Any) -> Sentiment:
        return _coerce_sentiment(value)

    @field_validator("keywords", "articles", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> List[str]:
        return _string_list(value)

    def to_trend(self) -> Trend:
        return Trend(
            topic=self.topic,
            mentions=self.mentions,
            sentiment=self.sentiment,
            keywords=list(self.keywords),
            articles=list(self.articles),
        )


class InsightPayload(_Payload):
    topic: str = ""
    summary: str = ""
    sentiment: Sentiment = Sentiment.NEUTRAL
    article_count: int = Field(default=0, alias="articleCount")
    impact_score: float = Field(default=0, alias="impactScore")
    trend_direction: Optional[TrendDirection] = Field(default=None, alias="trendDirection")
    keywords: List[str] = Field(default_factory=list)

    @field_validator("topic", "summary", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("sentiment", mode="before")
    @classmethod
    def _sentiment(cls, value: Any) -> Sentiment:
        return _coerce_sentiment(value)

    @field_validator("article_count", mode="before")
    @classmethod
    def _count(cls, value: Any) -> int:
        try:
            return max(0, int(value))
        except (TypeError, ValueError, OverflowError):
            return 0

    @field_validator("impact_score", mode="before")
    @classmethod
    def _impact(cls, value: Any) -> float:
        try:
            score = float(value)
        except (TypeError, ValueError):
            return 0
        return min(10.0, max(0.0, score))

    @field_validator("trend_direction", mode="before")
    @classmethod
    def _direction(cls, value: Any) -> Optional[TrendDirection]:
        if isinstance(value, str):
            try:
                return TrendDirection(value.strip().lower())
            except ValueError:
                return None
        return value if isinstance(value, TrendDirection) else None

    @field_validator("keywords", mode="before")
    @classmethod
    def _keywords(cls, value: Any) -> List[str]:
        return _string_list(value)

    def to_insight(self) -> Insight:
        return Insight(
            topic=self.topic,
            summary=self.summary,
            sentiment=self.sentiment,
            article_count=self.article_count,
            impact_score=self.impact_score,
            trend_direction=self.trend_direction,
            keywords=list(self.keywords),
        )


def _validate_all(records: Optional[Iterable[Any]], model: Type[P], kind: str) -> List[P]:
    if not records:
        return []
    parsed: List[P] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping %s #%d: expected an object, got %s", kind, index, type(record).__name__)
            continue
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as exc:
            logger.warning("Skipping %s #%d: %s", kind, index, exc.errors()[0].get("msg"))
        except (ValueError, TypeError, OverflowError) as exc:
            logger.warning("Skipping %s #%d: %s", kind, index, exc)
    return parsed


def parse_articles(records: Optional[Iterable[Any]]) -> List[Article]:
    return [payload.to_article() for payload in _validate_all(records, ArticlePayload, "article")]


def parse_trends(records: Optional[Iterable[Any]]) -> List[Trend]:
    return [payload.to_trend() for payload in _validate_all(records, TrendPayload, "trend")]


def parse_insights(records: Optional[Iterable[Any]]) -> List[Insight]:
    return [payload.to_insight() for payload in _validate_all(records, InsightPayload, "insight")]

"""
JSON-ready dictionaries for the rendering layer (camelCase keys, enum values as strings).
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from radar.formatters import format_time_ago, placeholder_image, truncate_text
from radar.models import Article, DashboardMetrics, FetchStatus, Insight, KeyCount, Trend
from radar.sections import HomeSections

MAX_INSIGHT_KEYWORDS = 5
MAX_SOURCE_CATEGORIES = 3
MAX_EXCERPT_LENGTH = 100


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _key_counts(entries: List[KeyCount], key_name: str = "key") -> List[Dict[str, Any]]:
    return [{key_name: entry.key, "count": entry.count, "percentage": entry.percentage} for entry in entries]


def trend_to_dict(trend: Trend) -> Dict[str, Any]:
    return {
        "topic": trend.topic,
        "mentions": trend.mentions,
        "sentiment": trend.sentiment.value,
        "keywords": list(trend.keywords),
        "articles": list(trend.articles),
    }


def insight_to_dict(insight: Insight) -> Dict[str, Any]:
    return {
        "topic": insight.topic,
        "summary": insight.summary,
        "sentiment": insight.sentiment.value,
        "articleCount": insight.article_count,
        "impactScore": insight.impact_score,
        "trendDirection": insight.trend_direction.value if insight.trend_direction else None,
        "keywords": list(insight.keywords[:MAX_INSIGHT_KEYWORDS]),
    }


def article_to_dict(article: Article, now: datetime) -> Dict[str, Any]:
    return {
        "title": article.title,
        "url": article.url,
        "source": article.source,
        "category": article.category,
        "excerpt": truncate_text(article.content, MAX_EXCERPT_LENGTH),
        "label": article.display_label,
        "published": _iso(article.published),
        "timeAgo": format_time_ago(article.published, now),
        "image": article.image or placeholder_image(article.source),
        "hasImage": bool(article.image),
        "sentiment": article.sentiment.value,
    }


def metrics_to_dict(metrics: DashboardMetrics) -> Dict[str, Any]:
    return {
        "generatedAt": _iso(metrics.generated_at),
        "overview": {
            "totalArticles": metrics.overview.total_articles,
            "totalTrends": metrics.overview.total_trends,
            "sourceCount": metrics.overview.source_count,
        },
        "trends": [trend_to_dict(trend) for trend in metrics.trends],
        "insights": [insight_to_dict(insight) for insight in metrics.insights],
        "trendsSynthesized": metrics.trends_synthesized,
        "insightsSynthesized": metrics.insights_synthesized,
        "categoryDistribution": _key_counts(metrics.category_distribution, "category"),
        "sentimentDistribution": _key_counts(metrics.sentiment_distribution, "sentiment"),
        "hourlyHistogram": [{"hour": hour, "count": count} for hour, count in enumerate(metrics.hourly_histogram)],
        "dailyHistogram": [
            {"daysAgo": bucket.days_ago, "label": bucket.label, "count": bucket.count}
            for bucket in metrics.daily_histogram
        ],
        "freshness": _key_counts(metrics.freshness, "tier"),
        "momentum": _key_counts(metrics.momentum, "direction"),
        "impactTiers": _key_counts(metrics.impact_tiers, "tier"),
        "topKeywords": [
            {"keyword": entry.key, "count": entry.count, "intensity": entry.percentage}
            for entry in metrics.top_keywords
        ],
        "categorySentimentMatrix": [
            {
                "category": row.category,
                "positive": row.positive,
                "neutral": row.neutral,
                "negative": row.negative,
                "total": row.total,
            }
            for row in metrics.category_sentiment_matrix
        ],
        "topTrending": [
            {
                "rank": bar.rank,
                "topic": bar.topic,
                "mentions": bar.mentions,
                "sentiment": bar.sentiment.value,
                "barPercentage": bar.bar_percentage,
            }
            for bar in metrics.top_trending
        ],
        "sourcePerformance": [
            {
                "source": entry.source,
                "count": entry.count,
                "withImages": entry.with_images,
                "categories": entry.categories[:MAX_SOURCE_CATEGORIES],
                "share": entry.share,
            }
            for entry in metrics.source_performance
        ],
    }


def sections_to_dict(sections: HomeSections, now: datetime) -> Dict[str, Any]:
    return {
        "featured": article_to_dict(sections.featured, now) if sections.featured else None,
        "topStories": [article_to_dict(article, now) for article in sections.top_stories],
        "categories": {
            name: [article_to_dict(article, now) for article in articles]
            for name, articles in sections.categories.items()
        },
        "latest": [article_to_dict(article, now) for article in sections.latest],
    }


def status_to_dict(status: FetchStatus) -> Dict[str, Any]:
    return {
        "name": status.name,
        "healthy": status.healthy,
        "last_error": status.last_error,
        "last_success": _iso(status.last_success),
        "items_last_fetch": status.items_last_fetch,
        "latency_ms": status.latency_ms,
        "extra": status.extra,
    }

"""
High-level orchestration: raw articles + optional trends/insights -> dashboard metrics.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from radar.frequency import as_distribution, count_by, fixed_counts, percentage, top_n
from radar.insights import InsightSynthesizer, resolve_insights
from radar.models import (
    Article,
    CategorySentimentRow,
    DailyBucket,
    DashboardMetrics,
    DashboardOverview,
    FreshnessTier,
    ImpactTier,
    Insight,
    KeyCount,
    Sentiment,
    SourcePerformance,
    Trend,
    TrendBar,
    TrendDirection,
)
from radar.timebuckets import DAILY_WINDOW_DAYS, TimeBucketer, daily_label, ensure_utc
from radar.trends import TrendSynthesizer, resolve_trends

logger = logging.getLogger(__name__)

TOP_CATEGORIES = 10
TOP_KEYWORDS = 15
TOP_MATRIX_CATEGORIES = 8
TOP_TRENDING = 10
HOURS_PER_DAY = 24
HIGH_IMPACT_SCORE = 7
MEDIUM_IMPACT_SCORE = 4

SENTIMENT_ORDER = (Sentiment.POSITIVE, Sentiment.NEGATIVE, Sentiment.NEUTRAL)
MOMENTUM_ORDER = (TrendDirection.RISING, TrendDirection.FALLING, TrendDirection.STABLE)
IMPACT_ORDER = (ImpactTier.HIGH, ImpactTier.MEDIUM, ImpactTier.LOW)
FRESHNESS_ORDER = (FreshnessTier.RECENT, FreshnessTier.TODAY, FreshnessTier.YESTERDAY, FreshnessTier.OLDER)


def impact_tier(score: Optional[float]) -> ImpactTier:
    score = score or 0
    if score >= HIGH_IMPACT_SCORE:
        return ImpactTier.HIGH
    if score >= MEDIUM_IMPACT_SCORE:
        return ImpactTier.MEDIUM
    return ImpactTier.LOW


class DashboardMetricsCompiler:
    def __init__(
        self,
        trend_synthesizer: Optional[TrendSynthesizer] = None,
        insight_synthesizer: Optional[InsightSynthesizer] = None,
    ) -> None:
        self.trend_synthesizer = trend_synthesizer or TrendSynthesizer()
        self.insight_synthesizer = insight_synthesizer or InsightSynthesizer()

    def compile(
        self,
        articles: Sequence[Article],
        trends: Sequence[Trend] = (),
        insights: Sequence[Insight] = (),
        *,
        now: datetime,
    ) -> DashboardMetrics:
        now = ensure_utc(now)
        bucketer = TimeBucketer(now)
        resolved_trends = resolve_trends(trends, articles, self.trend_synthesizer)
        resolved_insights = resolve_insights(insights, articles, now=now, synthesizer=self.insight_synthesizer)
        total = len(articles)

        metrics = DashboardMetrics(
            generated_at=now,
            overview=DashboardOverview(
                total_articles=total,
                total_trends=len(resolved_trends),
                source_count=len(count_by(articles, lambda a: a.source_label)),
            ),
            trends=resolved_trends,
            insights=resolved_insights,
            trends_synthesized=not trends,
            insights_synthesized=not insights,
            category_distribution=self.category_distribution(articles),
            sentiment_distribution=self.sentiment_distribution(resolved_trends),
            hourly_histogram=self.hourly_histogram(articles, bucketer),
            daily_histogram=self.daily_histogram(articles, bucketer),
            freshness=self.freshness(articles, bucketer),
            momentum=self.momentum(resolved_insights),
            impact_tiers=self.impact_tiers(resolved_insights),
            top_keywords=self.top_keywords(resolved_insights),
            category_sentiment_matrix=self.category_sentiment_matrix(articles),
            top_trending=self.top_trending(resolved_trends),
            source_performance=self.source_performance(articles),
        )
        logger.debug(
            "Compiled dashboard: %d articles, %d trends (synthesized=%s), %d insights (synthesized=%s)",
            total,
            len(resolved_trends),
            metrics.trends_synthesized,
            len(resolved_insights),
            metrics.insights_synthesized,
        )
        return metrics

    @staticmethod
    def category_distribution(articles: Sequence[Article]) -> List[KeyCount]:
        counts = count_by(articles, lambda a: a.category_label)
        return top_n(counts, TOP_CATEGORIES, total=len(articles))

    @staticmethod
    def sentiment_distribution(trends: Sequence[Trend]) -> List[KeyCount]:
        counts = fixed_counts(trends, lambda t: t.sentiment, SENTIMENT_ORDER)
        return as_distribution(counts, total=len(trends))

    @staticmethod
    def hourly_histogram(articles: Sequence[Article], bucketer: TimeBucketer) -> List[int]:
        histogram = [0] * HOURS_PER_DAY
        for hour, count in count_by(articles, lambda a: bucketer.hourly_bucket(a.published)).items():
            histogram[hour] = count
        return histogram

    @staticmethod
    def daily_histogram(articles: Sequence[Article], bucketer: TimeBucketer) -> List[DailyBucket]:
        counts = count_by(articles, lambda a: bucketer.daily_bucket(a.published))
        return [
            DailyBucket(days_ago=days, label=daily_label(days), count=counts.get(days, 0))
            for days in range(DAILY_WINDOW_DAYS + 1)
        ]

    @staticmethod
    def freshness(articles: Sequence[Article], bucketer: TimeBucketer) -> List[KeyCount]:
        counts = fixed_counts(articles, lambda a: bucketer.freshness_tier(a.published), FRESHNESS_ORDER)
        return as_distribution(counts, total=len(articles))

    @staticmethod
    def momentum(insights: Sequence[Insight]) -> List[KeyCount]:
        counts = fixed_counts(insights, lambda i: i.trend_direction, MOMENTUM_ORDER)
        return as_distribution(counts)

    @staticmethod
    def impact_tiers(insights: Sequence[Insight]) -> List[KeyCount]:
        counts = fixed_counts(insights, lambda i: impact_tier(i.impact_score), IMPACT_ORDER)
        return as_distribution(counts)

    @staticmethod
    def top_keywords(insights: Sequence[Insight]) -> List[KeyCount]:
        keywords = [keyword for insight in insights for keyword in insight.keywords]
        ranked = top_n(count_by(keywords, lambda k: k or None), TOP_KEYWORDS)
        if ranked:
            leader = ranked[0].count
            for entry in ranked:
                entry.percentage = percentage(entry.count, leader)
        return ranked

    @staticmethod
    def category_sentiment_matrix(articles: Sequence[Article]) -> List[CategorySentimentRow]:
        rows: Dict[str, CategorySentimentRow] = {}
        for article in articles:
            category = article.category_label
            row = rows.get(category)
            if row is None:
                row = CategorySentimentRow(category=category)
                rows[category] = row
            sentiment = article.sentiment.value if article.sentiment else Sentiment.NEUTRAL.value
            setattr(row, sentiment, getattr(row, sentiment) + 1)
        ranked = sorted(rows.values(), key=lambda r: r.total, reverse=True)
        return ranked[:TOP_MATRIX_CATEGORIES]

    @staticmethod
    def top_trending(trends: Sequence[Trend]) -> List[TrendBar]:
        leading = list(trends[:TOP_TRENDING])
        if not leading:
            return []
        max_mentions = leading[0].mentions or 1
        return [
            TrendBar(
                rank=index,
                topic=trend.topic,
                mentions=trend.mentions,
                sentiment=trend.sentiment,
                bar_percentage=percentage(trend.mentions, max_mentions),
            )
            for index, trend in enumerate(leading, 1)
        ]

    @staticmethod
    def source_performance(articles: Sequence[Article]) -> List[SourcePerformance]:
        sources: Dict[str, SourcePerformance] = {}
        for article in articles:
            name = article.source_label
            entry = sources.get(name)
            if entry is None:
                entry = SourcePerformance(source=name)
                sources[name] = entry
            entry.count += 1
            if article.image:
                entry.with_images += 1
            if article.category and article.category not in entry.categories:
                entry.categories.append(article.category)
        total = len(articles)
        for entry in sources.values():
            entry.share = percentage(entry.count, total)
        return sorted(sources.values(), key=lambda s: s.count, reverse=True)

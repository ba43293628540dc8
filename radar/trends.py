"""
Fallback trend generation from raw articles.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from radar.models import Article, Sentiment, Trend
from radar.signals import TREND_TITLE_RULES, TopicRule, match_topics

logger = logging.getLogger(__name__)

MAX_TRENDS = 10
POSITIVE_MENTIONS_THRESHOLD = 3


class TrendSynthesizer:
    def __init__(
        self,
        rules: Sequence[TopicRule] = TREND_TITLE_RULES,
        max_trends: int = MAX_TRENDS,
        positive_threshold: int = POSITIVE_MENTIONS_THRESHOLD,
    ) -> None:
        self.rules = rules
        self.max_trends = max_trends
        self.positive_threshold = positive_threshold

    def topics_for(self, article: Article) -> List[str]:
        """Category first (when it is not just the source name), then title rule labels."""
        topics: List[str] = []
        if article.category and article.category != article.source:
            topics.append(article.category)
        for label in match_topics(article.title, self.rules):
            if label not in topics:
                topics.append(label)
        return topics

    def synthesize(self, articles: Sequence[Article]) -> List[Trend]:
        if not articles:
            return []

        topic_map: Dict[str, Trend] = {}
        for article in articles:
            for topic in self.topics_for(article):
                trend = topic_map.get(topic)
                if trend is None:
                    trend = Trend(topic=topic, mentions=0, keywords=[topic])
                    topic_map[topic] = trend
                trend.mentions += 1
                if article.url:
                    trend.articles.append(article.url)

        ranked = sorted(topic_map.values(), key=lambda t: t.mentions, reverse=True)[: self.max_trends]
        for trend in ranked:
            trend.sentiment = Sentiment.POSITIVE if trend.mentions > self.positive_threshold else Sentiment.NEUTRAL

        logger.info("Generated %d trends from %d articles", len(ranked), len(articles))
        return ranked


def resolve_trends(
    trends: Sequence[Trend],
    articles: Sequence[Article],
    synthesizer: TrendSynthesizer | None = None,
) -> List[Trend]:
    """Upstream trends when present, otherwise trends derived from ``articles``."""
    if trends:
        return list(trends)
    return (synthesizer or TrendSynthesizer()).synthesize(articles)

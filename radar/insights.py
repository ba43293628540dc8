"""
Fallback insight generation for fixed topical domains.

Each domain is a :class:`InsightDomain` entry in ``INSIGHT_DOMAINS``; the synthesizer
walks them in order and emits one :class:`Insight` per domain with at least one match.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Sequence

from radar.frequency import round_half_up
from radar.models import Article, Insight, Sentiment, TrendDirection
from radar.signals import TopicRule
from radar.timebuckets import TimeBucketer
from utils.keywords import (
    BIG_TECH_KEYWORDS,
    CLOUD_KEYWORDS,
    INSIGHT_AI_KEYWORDS,
    SECURITY_KEYWORDS,
    STARTUP_KEYWORDS,
)

logger = logging.getLogger(__name__)

MAX_INSIGHTS = 8
MAX_IMPACT_SCORE = 10
AI_POSITIVE_ARTICLE_THRESHOLD = 10
MOMENTUM_WINDOW_HOURS = 6
MOMENTUM_SHARE_DIVISOR = 3


def _fixed(sentiment: Sentiment) -> Callable[[int], Sentiment]:
    return lambda _count: sentiment


def _ai_sentiment(count: int) -> Sentiment:
    return Sentiment.POSITIVE if count > AI_POSITIVE_ARTICLE_THRESHOLD else Sentiment.NEUTRAL


@dataclass(frozen=True)
class InsightDomain:
    rule: TopicRule
    summary_template: str
    keywords: Sequence[str]
    sentiment_for: Callable[[int], Sentiment]
    tracks_momentum: bool = False

    @property
    def topic(self) -> str:
        return self.rule.label


INSIGHT_DOMAINS: List[InsightDomain] = [
    InsightDomain(
        rule=TopicRule("Artificial Intelligence", tuple(INSIGHT_AI_KEYWORDS)),
        summary_template=(
            "{count} articles discuss AI developments. Recent coverage includes ChatGPT updates, "
            "OpenAI announcements, and AI applications across healthcare, enterprise, and consumer sectors."
        ),
        keywords=("AI", "ChatGPT", "OpenAI", "Machine Learning", "LLM"),
        sentiment_for=_ai_sentiment,
        tracks_momentum=True,
    ),
    InsightDomain(
        rule=TopicRule("Cybersecurity", tuple(SECURITY_KEYWORDS), frozenset({"Security"})),
        summary_template=(
            "{count} security-related stories covering data breaches, hacking incidents, "
            "vulnerability disclosures, and cybersecurity policy developments."
        ),
        keywords=("Security", "Hacking", "Data Breach", "Privacy", "Vulnerability"),
        sentiment_for=_fixed(Sentiment.NEGATIVE),
    ),
    InsightDomain(
        rule=TopicRule("Big Tech", tuple(BIG_TECH_KEYWORDS)),
        summary_template=(
            "Major tech companies feature in {count} stories covering product launches, "
            "regulatory changes, earnings reports, and strategic initiatives."
        ),
        keywords=("Google", "Apple", "Microsoft", "Meta", "Amazon"),
        sentiment_for=_fixed(Sentiment.NEUTRAL),
    ),
    InsightDomain(
        rule=TopicRule("Startups & Funding", tuple(STARTUP_KEYWORDS), frozenset({"Startups"})),
        summary_template=(
            "{count} articles covering startup funding rounds, venture capital activity, "
            "and emerging companies in AI, fintech, and enterprise software."
        ),
        keywords=("Startups", "Funding", "VC", "Investment", "Series A"),
        sentiment_for=_fixed(Sentiment.POSITIVE),
    ),
    InsightDomain(
        rule=TopicRule("Cloud & Infrastructure", tuple(CLOUD_KEYWORDS)),
        summary_template=(
            "{count} stories on cloud computing, infrastructure-as-code, containerization, and DevOps practices."
        ),
        keywords=("Cloud", "AWS", "Kubernetes", "DevOps", "Infrastructure"),
        sentiment_for=_fixed(Sentiment.NEUTRAL),
    ),
]


def impact_score(count: int, total: int) -> int:
    if total <= 0:
        return 0
    return min(MAX_IMPACT_SCORE, round_half_up(count / total * MAX_IMPACT_SCORE))


class InsightSynthesizer:
    def __init__(self, domains: Sequence[InsightDomain] = INSIGHT_DOMAINS, max_insights: int = MAX_INSIGHTS) -> None:
        self.domains = domains
        self.max_insights = max_insights

    def synthesize(self, articles: Sequence[Article], *, now: datetime) -> List[Insight]:
        if not articles:
            return []

        bucketer = TimeBucketer(now)
        total = len(articles)
        insights: List[Insight] = []
        for domain in self.domains:
            matched = [article for article in articles if domain.rule.matches_article(article)]
            count = len(matched)
            if count == 0:
                continue
            insights.append(
                Insight(
                    topic=domain.topic,
                    summary=domain.summary_template.format(count=count),
                    sentiment=domain.sentiment_for(count),
                    article_count=count,
                    impact_score=impact_score(count, total),
                    trend_direction=self._direction(domain, matched, bucketer),
                    keywords=list(domain.keywords),
                )
            )

        logger.info("Generated %d insights from %d articles", len(insights), total)
        return insights[: self.max_insights]

    @staticmethod
    def _direction(domain: InsightDomain, matched: Sequence[Article], bucketer: TimeBucketer) -> TrendDirection:
        if not domain.tracks_momentum:
            return TrendDirection.STABLE
        recent = sum(1 for article in matched if bucketer.is_within_hours(article.published, MOMENTUM_WINDOW_HOURS))
        if recent > len(matched) / MOMENTUM_SHARE_DIVISOR:
            return TrendDirection.RISING
        return TrendDirection.STABLE


def resolve_insights(
    insights: Sequence[Insight],
    articles: Sequence[Article],
    *,
    now: datetime,
    synthesizer: InsightSynthesizer | None = None,
) -> List[Insight]:
    """Upstream insights when present, otherwise insights derived from ``articles``."""
    if insights:
        return list(insights)
    return (synthesizer or InsightSynthesizer()).synthesize(articles, now=now)

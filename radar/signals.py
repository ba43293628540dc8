"""
Keyword-based topic matching for article titles.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from radar.models import Article
from utils.keywords import (
    AI_KEYWORDS,
    BIG_TECH_KEYWORDS,
    CLOUD_KEYWORDS,
    CRYPTO_KEYWORDS,
    SECURITY_KEYWORDS,
    STARTUP_KEYWORDS,
    TESLA_MUSK_KEYWORDS,
)


def matches(text: Optional[str], keywords: Iterable[str]) -> bool:
    """Case-insensitive substring test; True on the first keyword found in ``text``."""
    if not text:
        return False
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


@dataclass(frozen=True)
class TopicRule:
    """
    A labelled set of lowercase title substrings, optionally also matching exact categories.
    """

    label: str
    keywords: Sequence[str]
    categories: FrozenSet[str] = frozenset()

    def matches_title(self, title: Optional[str]) -> bool:
        return matches(title, self.keywords)

    def matches_article(self, article: Article) -> bool:
        if article.category and article.category in self.categories:
            return True
        return self.matches_title(article.title)


SIGNAL_BUCKETS: Dict[str, TopicRule] = {
    "AI": TopicRule("AI", tuple(AI_KEYWORDS)),
    "Security": TopicRule("Security", tuple(SECURITY_KEYWORDS), frozenset({"Security"})),
    "Big Tech": TopicRule("Big Tech", tuple(BIG_TECH_KEYWORDS), frozenset({"Big Tech"})),
    "Startups/Funding": TopicRule("Startups/Funding", tuple(STARTUP_KEYWORDS), frozenset({"Startups"})),
    "Cloud/Infrastructure": TopicRule("Cloud/Infrastructure", tuple(CLOUD_KEYWORDS)),
    "Crypto": TopicRule("Crypto", tuple(CRYPTO_KEYWORDS)),
    "Tesla/Musk": TopicRule("Tesla/Musk", tuple(TESLA_MUSK_KEYWORDS)),
}

# Order matters: topics are emitted in this order for each article.
TREND_TITLE_RULES: List[TopicRule] = [
    TopicRule("AI", ("ai", "artificial intelligence")),
    TopicRule("ChatGPT", ("chatgpt",)),
    TopicRule("OpenAI", ("openai",)),
    TopicRule("Google", ("google",)),
    TopicRule("Apple", ("apple",)),
    TopicRule("Microsoft", ("microsoft",)),
    TopicRule("Tesla/Musk", tuple(TESLA_MUSK_KEYWORDS)),
    TopicRule("Crypto", tuple(CRYPTO_KEYWORDS)),
    TopicRule("Security", ("security", "hack")),
]


def match_topics(title: Optional[str], rules: Sequence[TopicRule] = TREND_TITLE_RULES) -> List[str]:
    """Return the labels of every rule whose keywords occur in ``title``, in rule order."""
    return [rule.label for rule in rules if rule.matches_title(title)]


def classify(article: Article, buckets: Optional[Dict[str, TopicRule]] = None) -> List[str]:
    buckets = SIGNAL_BUCKETS if buckets is None else buckets
    return [name for name, rule in buckets.items() if rule.matches_article(article)]

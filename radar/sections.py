"""
Article selections for the home view: featured story, top stories, topical sections, latest list.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from radar.models import Article
from radar.signals import TopicRule
from utils.keywords import BIG_TECH_KEYWORDS, CATEGORY_SECTION_AI_KEYWORDS, CATEGORY_SECTION_SECURITY_KEYWORDS

TOP_STORIES_LIMIT = 4
LATEST_LIMIT = 8
SECTION_LIMIT = 4

CATEGORY_SECTIONS: Dict[str, TopicRule] = {
    "AI": TopicRule("AI", tuple(CATEGORY_SECTION_AI_KEYWORDS), frozenset({"AI"})),
    "Security": TopicRule("Security", tuple(CATEGORY_SECTION_SECURITY_KEYWORDS), frozenset({"Security"})),
    "Big Tech": TopicRule("Big Tech", tuple(BIG_TECH_KEYWORDS), frozenset({"Big Tech"})),
}


@dataclass
class HomeSections:
    featured: Optional[Article]
    top_stories: List[Article] = field(default_factory=list)
    categories: Dict[str, List[Article]] = field(default_factory=dict)
    latest: List[Article] = field(default_factory=list)


def featured_article(articles: Sequence[Article]) -> Optional[Article]:
    """First article with an image, falling back to the first article."""
    for article in articles:
        if article.image:
            return article
    return articles[0] if articles else None


def top_stories(articles: Sequence[Article], featured: Optional[Article], limit: int = TOP_STORIES_LIMIT) -> List[Article]:
    return [article for article in articles if article is not featured][:limit]


def category_section(articles: Sequence[Article], category: str, limit: int = SECTION_LIMIT) -> List[Article]:
    rule = CATEGORY_SECTIONS.get(category)
    if rule is None:
        selected = [article for article in articles if article.category == category]
    else:
        selected = [article for article in articles if rule.matches_article(article)]
    return selected[:limit]


def build_home_sections(articles: Sequence[Article]) -> HomeSections:
    featured = featured_article(articles)
    categories = {}
    for name in CATEGORY_SECTIONS:
        selected = category_section(articles, name)
        if selected:
            categories[name] = selected
    return HomeSections(
        featured=featured,
        top_stories=top_stories(articles, featured),
        categories=categories,
        latest=list(articles[:LATEST_LIMIT]),
    )

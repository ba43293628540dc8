import unittest
from datetime import datetime, timezone

from radar.models import Sentiment, TrendDirection
from radar.schemas import parse_articles, parse_insights, parse_timestamp, parse_trends


class TimestampTests(unittest.TestCase):
    def test_iso_with_z_suffix(self):
        parsed = parse_timestamp("2024-11-25T12:00:00Z")
        self.assertEqual(parsed, datetime(2024, 11, 25, 12, 0, tzinfo=timezone.utc))

    def test_offset_is_normalized_to_utc(self):
        parsed = parse_timestamp("2024-11-25T14:00:00+02:00")
        self.assertEqual(parsed, datetime(2024, 11, 25, 12, 0, tzinfo=timezone.utc))

    def test_epoch_seconds(self):
        self.assertEqual(parse_timestamp(0), datetime(1970, 1, 1, tzinfo=timezone.utc))

    def test_out_of_range_after_utc_conversion_becomes_none(self):
        self.assertIsNone(parse_timestamp("9999-12-31T23:00:00-05:00"))
        self.assertIsNone(parse_timestamp("0001-01-01T01:00:00+05:00"))

    def test_garbage_becomes_none(self):
        for value in ("not a date", "", None, {"when": "now"}, True):
            with self.subTest(value=value):
                self.assertIsNone(parse_timestamp(value))


class ArticleParsingTests(unittest.TestCase):
    def test_defaults_and_coercion(self):
        articles = parse_articles(
            [
                {
                    "title": "  OpenAI ships update ",
                    "source": "TechCrunch",
                    "url": "https://tc/1",
                    "category": "",
                    "published": "2024-11-25T10:00:00Z",
                    "sentiment": "POSITIVE",
                    "extra": "ignored",
                },
                {"title": "Undated", "source": None, "published": "yesterday-ish", "sentiment": "angry"},
            ]
        )
        first, second = articles
        self.assertEqual(first.title, "OpenAI ships update")
        self.assertIsNone(first.category)
        self.assertEqual(first.sentiment, Sentiment.POSITIVE)
        self.assertEqual(first.published, datetime(2024, 11, 25, 10, 0, tzinfo=timezone.utc))
        self.assertEqual(second.source, "")
        self.assertEqual(second.source_label, "Unknown")
        self.assertIsNone(second.published)
        self.assertEqual(second.sentiment, Sentiment.NEUTRAL)

    def test_non_objects_are_skipped(self):
        articles = parse_articles(["oops", 3, {"title": "Kept", "source": "Wire"}])
        self.assertEqual([a.title for a in articles], ["Kept"])

    def test_out_of_range_timestamp_keeps_the_batch(self):
        articles = parse_articles(
            [
                {"title": "Far future", "source": "Wire", "published": "9999-12-31T23:00:00-05:00"},
                {"title": "Kept", "source": "Wire", "published": "2024-11-25T10:00:00Z"},
            ]
        )
        self.assertEqual([a.title for a in articles], ["Far future", "Kept"])
        self.assertIsNone(articles[0].published)
        self.assertIsNotNone(articles[1].published)

    def test_none_and_empty(self):
        self.assertEqual(parse_articles(None), [])
        self.assertEqual(parse_articles([]), [])


class TrendParsingTests(unittest.TestCase):
    def test_topic_is_required(self):
        trends = parse_trends([{"mentions": 4}, {"topic": "  ", "mentions": 2}, {"topic": "AI", "mentions": "5"}])
        self.assertEqual([(t.topic, t.mentions) for t in trends], [("AI", 5)])

    def test_mentions_floor_and_lists(self):
        trend = parse_trends([{"topic": "Chips", "mentions": 0, "keywords": ["chips", None, ""], "articles": "x"}])[0]
        self.assertEqual(trend.mentions, 1)
        self.assertEqual(trend.keywords, ["chips"])
        self.assertEqual(trend.articles, [])

    def test_infinite_mentions_fall_back_to_one(self):
        trends = parse_trends([{"topic": "Chips", "mentions": float("inf")}, {"topic": "AI", "mentions": 2}])
        self.assertEqual([(t.topic, t.mentions) for t in trends], [("Chips", 1), ("AI", 2)])


class InsightParsingTests(unittest.TestCase):
    def test_camel_case_aliases(self):
        insight = parse_insights(
            [
                {
                    "topic": "Chips",
                    "summary": "Supply tightens",
                    "sentiment": "negative",
                    "articleCount": 4,
                    "impactScore": 12,
                    "trendDirection": "Rising",
                    "keywords": ["chips", "fabs"],
                }
            ]
        )[0]
        self.assertEqual(insight.article_count, 4)
        self.assertEqual(insight.impact_score, 10)
        self.assertEqual(insight.trend_direction, TrendDirection.RISING)
        self.assertEqual(insight.sentiment, Sentiment.NEGATIVE)

    def test_unknown_direction_and_bad_numbers(self):
        insight = parse_insights([{"topic": "Chips", "trendDirection": "sideways", "impactScore": "n/a", "articleCount": -3}])[0]
        self.assertIsNone(insight.trend_direction)
        self.assertEqual(insight.impact_score, 0)
        self.assertEqual(insight.article_count, 0)

    def test_infinite_article_count_falls_back_to_zero(self):
        insight = parse_insights([{"topic": "Chips", "articleCount": float("inf"), "impactScore": float("inf")}])[0]
        self.assertEqual(insight.article_count, 0)
        self.assertEqual(insight.impact_score, 10)

    def test_snake_case_names_are_accepted(self):
        insight = parse_insights([{"topic": "Chips", "impact_score": 6, "trend_direction": "falling"}])[0]
        self.assertEqual(insight.impact_score, 6)
        self.assertEqual(insight.trend_direction, TrendDirection.FALLING)


if __name__ == "__main__":
    unittest.main()

import unittest

from radar.models import Article
from radar.signals import SIGNAL_BUCKETS, TREND_TITLE_RULES, TopicRule, classify, match_topics, matches


class MatchesTests(unittest.TestCase):
    def test_case_insensitive_substring(self):
        self.assertTrue(matches("OpenAI ships GPT update", {"openai"}))
        self.assertTrue(matches("Bitcoin rallies", ["crypto", "bitcoin"]))
        self.assertFalse(matches("Weather report", ["crypto", "bitcoin"]))

    def test_empty_text_never_matches(self):
        for rule in SIGNAL_BUCKETS.values():
            self.assertFalse(matches("", rule.keywords))
        self.assertFalse(matches(None, ["ai"]))

    def test_empty_keyword_set_never_matches(self):
        self.assertFalse(matches("Anything at all", set()))


class TopicRuleTests(unittest.TestCase):
    def test_category_match_without_title_match(self):
        rule = SIGNAL_BUCKETS["Security"]
        article = Article(title="Quarterly roundup", source="Wire", category="Security")
        self.assertTrue(rule.matches_article(article))

    def test_title_rules_emit_in_fixed_order(self):
        topics = match_topics("Musk says Google and OpenAI race on AI security")
        self.assertEqual(topics, ["AI", "OpenAI", "Google", "Tesla/Musk", "Security"])

    def test_trend_rules_cover_expected_labels(self):
        labels = [rule.label for rule in TREND_TITLE_RULES]
        self.assertEqual(
            labels,
            ["AI", "ChatGPT", "OpenAI", "Google", "Apple", "Microsoft", "Tesla/Musk", "Crypto", "Security"],
        )

    def test_classify_uses_named_buckets(self):
        article = Article(title="Startup lands funding for Kubernetes tooling", source="Wire")
        self.assertEqual(classify(article), ["Startups/Funding", "Cloud/Infrastructure"])

    def test_custom_rule(self):
        rule = TopicRule("Chips", ("nvidia", "semiconductor"))
        self.assertTrue(rule.matches_title("NVIDIA earnings beat"))
        self.assertFalse(rule.matches_title(""))


if __name__ == "__main__":
    unittest.main()

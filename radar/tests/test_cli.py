import json
import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from click.testing import CliRunner

from radar.cli import cli
from radar.models import Article, DashboardInputs, FetchStatus

ARTICLES = {
    "articles": [
        {"title": "AI model tops benchmark", "source": "Wire", "published": "2024-11-25T12:00:00Z"},
        {"title": "New AI chip unveiled", "source": "Wire", "published": "2024-11-25T11:00:00Z"},
        {"title": "Major security hack hits bank", "source": "Daily", "published": "2024-11-24T06:00:00Z"},
    ]
}


class CompileCommandTests(unittest.TestCase):
    def test_compile_from_files(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            with open("articles.json", "w", encoding="utf-8") as handle:
                json.dump(ARTICLES, handle)
            with open("trends.json", "w", encoding="utf-8") as handle:
                json.dump([{"topic": "Chips", "mentions": 4}], handle)

            result = runner.invoke(
                cli,
                ["compile", "articles.json", "--trends", "trends.json", "--now", "2024-11-25T12:00:00Z"],
            )

        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.output)
        self.assertEqual(payload["overview"]["totalArticles"], 3)
        self.assertFalse(payload["trendsSynthesized"])
        self.assertEqual(payload["trends"][0]["topic"], "Chips")
        self.assertTrue(payload["insightsSynthesized"])
        freshness = {entry["tier"]: entry["count"] for entry in payload["freshness"]}
        self.assertEqual(freshness, {"recent": 2, "today": 0, "yesterday": 1, "older": 0})

    def test_rejects_bad_now(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            with open("articles.json", "w", encoding="utf-8") as handle:
                json.dump([], handle)
            result = runner.invoke(cli, ["compile", "articles.json", "--now", "whenever"])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("--now", result.output)


class FetchCommandTests(unittest.TestCase):
    @patch("radar.cli.DashboardClient.fetch_all")
    def test_fetch_prints_metrics_and_warnings(self, mock_fetch_all):
        fetched_at = datetime(2024, 11, 25, 12, 0, tzinfo=timezone.utc)
        mock_fetch_all.return_value = DashboardInputs(
            articles=[Article(title="OpenAI ships update", source="Wire", published=fetched_at)],
            trends=[],
            insights=[],
            fetched_at=fetched_at,
            statuses=[FetchStatus(name="trends", healthy=False, last_error="timeout")],
        )

        result = CliRunner().invoke(cli, ["fetch", "--base-url", "http://upstream:3001"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("trends fetch failed: timeout", result.output)
        payload = json.loads(result.output[result.output.index("{"):])
        self.assertEqual(payload["overview"]["totalArticles"], 1)


if __name__ == "__main__":
    unittest.main()

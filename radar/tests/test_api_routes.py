import unittest
from datetime import datetime, timedelta, timezone

from flask import Flask

from api_routes import register_routes
from radar.dashboard import DashboardMetricsCompiler
from radar.models import Article
from radar.sections import build_home_sections

NOW = datetime(2024, 11, 25, 12, 0, tzinfo=timezone.utc)

ARTICLES = [
    Article(title="OpenAI ships update", source="TechCrunch", url="https://tc/1", published=NOW - timedelta(hours=1)),
    Article(title="Major security hack hits bank", source="The Verge", category="Security", image="https://img/2.png"),
]


class FakeService:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.refresh_calls = []

    def get_dashboard(self, force_refresh=False):
        self.refresh_calls.append(force_refresh)
        if self.fail:
            raise RuntimeError("upstream exploded")
        return DashboardMetricsCompiler().compile(ARTICLES, now=NOW)

    def get_home_sections(self, force_refresh=False):
        self.refresh_calls.append(force_refresh)
        return build_home_sections(ARTICLES)

    def get_status(self):
        if self.fail:
            raise RuntimeError("status exploded")
        return {"upstream": {"healthy": True}}


class ApiRoutesTests(unittest.TestCase):
    def _client(self, service):
        app = Flask(__name__)
        register_routes(app, service)
        return app.test_client()

    def test_health(self):
        response = self._client(FakeService()).get("/health")
        self.assertEqual(response.get_json(), {"status": "ok"})

    def test_dashboard(self):
        service = FakeService()
        response = self._client(service).get("/api/dashboard?refresh=1")
        body = response.get_json()

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["status"], "success")
        self.assertEqual(body["overview"]["totalArticles"], 2)
        self.assertEqual(service.refresh_calls, [True])

    def test_trends_and_insights(self):
        client = self._client(FakeService())
        trends = client.get("/api/trends").get_json()
        insights = client.get("/api/insights").get_json()

        self.assertTrue(trends["synthesized"])
        self.assertEqual([t["topic"] for t in trends["trends"]], ["AI", "OpenAI", "Security"])
        self.assertEqual(
            [i["topic"] for i in insights["insights"]],
            ["Artificial Intelligence", "Cybersecurity"],
        )

    def test_home(self):
        body = self._client(FakeService()).get("/api/home").get_json()
        self.assertEqual(body["featured"]["title"], "Major security hack hits bank")
        self.assertEqual([a["title"] for a in body["topStories"]], ["OpenAI ships update"])
        self.assertIn("Security", body["categories"])

    def test_failures_return_500(self):
        client = self._client(FakeService(fail=True))
        for path in ("/api/dashboard", "/api/trends", "/api/insights", "/api/status"):
            with self.subTest(path=path):
                response = client.get(path)
                self.assertEqual(response.status_code, 500)
                self.assertEqual(response.get_json()["status"], "error")

    def test_status(self):
        body = self._client(FakeService()).get("/api/status").get_json()
        self.assertEqual(body["status"], "ok")
        self.assertTrue(body["upstream"]["healthy"])


if __name__ == "__main__":
    unittest.main()

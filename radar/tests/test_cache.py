import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from radar.cache import InputsCache
from radar.models import Article, DashboardInputs


def _inputs(count=1):
    return DashboardInputs(
        articles=[Article(title=f"Story {i}", source="Wire") for i in range(count)],
        trends=[],
        insights=[],
        fetched_at=datetime(2024, 11, 25, 12, 0, tzinfo=timezone.utc),
    )


class InputsCacheTests(unittest.TestCase):
    def test_set_and_get(self):
        cache = InputsCache(ttl_seconds=60)
        inputs = _inputs()
        cache.set(inputs)
        self.assertIs(cache.get(), inputs)

    def test_set_replaces_previous_inputs(self):
        cache = InputsCache(ttl_seconds=60)
        cache.set(_inputs(1))
        newer = _inputs(2)
        cache.set(newer)
        self.assertIs(cache.get(), newer)

    @patch("radar.cache.time.time")
    def test_expired_entry_is_dropped(self, mock_time):
        cache = InputsCache(ttl_seconds=60)
        mock_time.return_value = 1000.0
        cache.set(_inputs())
        mock_time.return_value = 1059.0
        self.assertIsNotNone(cache.get())
        mock_time.return_value = 1061.0
        self.assertIsNone(cache.get())
        self.assertIsNone(cache.snapshot()["entry"])

    def test_zero_ttl_disables_caching(self):
        cache = InputsCache(ttl_seconds=0)
        cache.set(_inputs())
        self.assertIsNone(cache.get())

    def test_snapshot_reports_sizes_only(self):
        cache = InputsCache(ttl_seconds=60)
        self.assertIsNone(cache.snapshot()["entry"])
        cache.set(_inputs(3))
        snapshot = cache.snapshot()
        self.assertEqual(snapshot["ttl_seconds"], 60)
        entry = snapshot["entry"]
        self.assertEqual((entry["articles"], entry["trends"], entry["insights"]), (3, 0, 0))

    def test_clear(self):
        cache = InputsCache()
        cache.set(_inputs())
        cache.clear()
        self.assertIsNone(cache.get())


if __name__ == "__main__":
    unittest.main()

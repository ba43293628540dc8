import threading
import time
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import radar
from radar.cache import InputsCache
from radar.models import Article, DashboardInputs

INPUTS = DashboardInputs(
    articles=[Article(title="OpenAI ships update", source="Wire")],
    trends=[],
    insights=[],
    fetched_at=datetime(2024, 11, 25, 12, 0, tzinfo=timezone.utc),
)


class GetInputsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cache = InputsCache(ttl_seconds=60)
        self.poller = MagicMock()

        def slow_refresh():
            time.sleep(0.05)
            self.cache.set(INPUTS)
            return INPUTS

        self.poller.refresh.side_effect = slow_refresh
        patcher_cache = patch.object(radar, "_cache", self.cache)
        patcher_poller = patch.object(radar, "_poller", self.poller)
        patcher_cache.start()
        patcher_poller.start()
        self.addCleanup(patcher_cache.stop)
        self.addCleanup(patcher_poller.stop)

    def test_concurrent_misses_fetch_once(self):
        results = []
        threads = [threading.Thread(target=lambda: results.append(radar.get_inputs())) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(self.poller.refresh.call_count, 1)
        self.assertEqual(len(results), 5)
        self.assertTrue(all(result is INPUTS for result in results))

    def test_cache_hit_skips_refresh(self):
        self.cache.set(INPUTS)
        self.assertIs(radar.get_inputs(), INPUTS)
        self.poller.refresh.assert_not_called()

    def test_force_refresh_bypasses_cache(self):
        self.cache.set(INPUTS)
        radar.get_inputs(force_refresh=True)
        self.assertEqual(self.poller.refresh.call_count, 1)


if __name__ == "__main__":
    unittest.main()

"""
HTTP client for the upstream articles/insights/trends API.

The three collections are fetched independently; a failed fetch yields an empty
collection plus an unhealthy :class:`FetchStatus`, never an exception.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from radar.models import Article, DashboardInputs, FetchStatus, Insight, Trend
from radar.schemas import parse_articles, parse_insights, parse_trends

logger = logging.getLogger(__name__)

T = TypeVar("T")

ARTICLES_PATH = "/api/articles"
INSIGHTS_PATH = "/api/insights"
TRENDS_PATH = "/api/trends"


class HttpClient:
    def __init__(self, timeout: int = 15, max_retries: int = 3, user_agent: str | None = None):
        self.timeout = timeout
        self.session = requests.Session()
        retry = Retry(
            total=max_retries,
            backoff_factor=0.6,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update(
            {
                "User-Agent": user_agent or "TrendRadar-Dashboard/1.0",
                "Accept": "application/json",
            }
        )

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``url`` and decode JSON; raises ``requests.RequestException`` or ``ValueError``."""
        resp = self.session.get(url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()


class DashboardClient:
    def __init__(self, base_url: str, http: Optional[HttpClient] = None, timeout: int = 15, max_retries: int = 3) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or HttpClient(timeout=timeout, max_retries=max_retries)

    def fetch_articles(self, *, now: datetime) -> Tuple[List[Article], FetchStatus]:
        return self._fetch_collection("articles", ARTICLES_PATH, parse_articles, now)

    def fetch_insights(self, *, now: datetime) -> Tuple[List[Insight], FetchStatus]:
        return self._fetch_collection("insights", INSIGHTS_PATH, parse_insights, now)

    def fetch_trends(self, *, now: datetime) -> Tuple[List[Trend], FetchStatus]:
        return self._fetch_collection("trends", TRENDS_PATH, parse_trends, now)

    def fetch_all(self, now: Optional[datetime] = None) -> DashboardInputs:
        """Run the three fetches concurrently; completion order does not matter."""
        now = now or datetime.now(timezone.utc)
        with ThreadPoolExecutor(max_workers=3) as executor:
            articles_future = executor.submit(self.fetch_articles, now=now)
            insights_future = executor.submit(self.fetch_insights, now=now)
            trends_future = executor.submit(self.fetch_trends, now=now)
            articles, articles_status = articles_future.result()
            insights, insights_status = insights_future.result()
            trends, trends_status = trends_future.result()

        logger.info(
            "Fetched %d articles, %d insights, %d trends from %s",
            len(articles),
            len(insights),
            len(trends),
            self.base_url,
        )
        return DashboardInputs(
            articles=articles,
            trends=trends,
            insights=insights,
            fetched_at=now,
            statuses=[articles_status, insights_status, trends_status],
        )

    def _fetch_collection(
        self,
        name: str,
        path: str,
        parser: Callable[[Any], List[T]],
        now: datetime,
    ) -> Tuple[List[T], FetchStatus]:
        url = f"{self.base_url}{path}"
        start = time.time()
        try:
            payload = self.http.get_json(url)
        except (requests.RequestException, ValueError) as exc:
            latency_ms = (time.time() - start) * 1000
            logger.warning("Fetching %s from %s failed: %s", name, url, exc)
            return [], FetchStatus(name=name, healthy=False, last_error=str(exc), latency_ms=latency_ms)

        records = payload.get(name) if isinstance(payload, dict) else payload
        if records is not None and not isinstance(records, list):
            logger.warning("Unexpected %s payload shape from %s: %s", name, url, type(records).__name__)
            records = None
        items = parser(records)
        latency_ms = (time.time() - start) * 1000
        return items, FetchStatus(
            name=name,
            healthy=True,
            last_success=now,
            items_last_fetch=len(items),
            latency_ms=latency_ms,
            extra={"url": url},
        )

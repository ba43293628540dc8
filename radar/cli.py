"""
Command line entry points for compiling dashboard metrics outside the web app.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

import click

from radar.client import DashboardClient
from radar.dashboard import DashboardMetricsCompiler
from radar.payload import metrics_to_dict
from radar.schemas import parse_articles, parse_insights, parse_timestamp, parse_trends
from radar.settings import load_settings


def _load_records(path: Optional[Path], key: str) -> List[Any]:
    if path is None:
        return []
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get(key) or []
    if not isinstance(data, list):
        raise click.BadParameter(f"{path} must hold a list or an object with a '{key}' list")
    return data


def _resolve_now(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    parsed = parse_timestamp(value)
    if parsed is None:
        raise click.BadParameter(f"not an ISO-8601 timestamp: {value}", param_hint="--now")
    return parsed


@click.group()
def cli():
    pass


@cli.command("compile")
@click.argument("articles", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--trends", "trends_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--insights", "insights_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--now", "now_value", help="Reference instant (ISO-8601); defaults to the current time.")
def compile_command(articles: Path, trends_path: Optional[Path], insights_path: Optional[Path], now_value: Optional[str]):
    """Compile metrics from JSON files exported by the articles API."""
    metrics = DashboardMetricsCompiler().compile(
        parse_articles(_load_records(articles, "articles")),
        parse_trends(_load_records(trends_path, "trends")),
        parse_insights(_load_records(insights_path, "insights")),
        now=_resolve_now(now_value),
    )
    click.echo(json.dumps(metrics_to_dict(metrics), ensure_ascii=False, indent=2))


@cli.command()
@click.option("--base-url", default=None, help="Articles API base URL; defaults to RADAR_API_URL.")
def fetch(base_url: Optional[str]):
    """Fetch the live collections once and print the compiled metrics."""
    settings = load_settings()
    client = DashboardClient(
        base_url or settings.api_base_url,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
    )
    inputs = client.fetch_all()
    for status in inputs.statuses:
        if not status.healthy:
            click.echo(f"warning: {status.name} fetch failed: {status.last_error}", err=True)
    metrics = DashboardMetricsCompiler().compile(inputs.articles, inputs.trends, inputs.insights, now=inputs.fetched_at)
    click.echo(json.dumps(metrics_to_dict(metrics), ensure_ascii=False, indent=2))


if __name__ == "__main__":  # pragma: no cover
    cli()

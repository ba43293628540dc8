"""API routes for the TrendRadar dashboard."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import jsonify, request

from radar.payload import insight_to_dict, metrics_to_dict, sections_to_dict, trend_to_dict

logger = logging.getLogger("trendradar")

_TRUTHY = ("1", "true", "yes")


def _force_refresh() -> bool:
    return (request.args.get("refresh") or "").lower() in _TRUTHY


def register_routes(app, service):
    """Register all API routes with the Flask app.

    Args:
        app: Flask app instance.
        service: Object exposing ``get_dashboard``, ``get_home_sections`` and ``get_status``
            (the :mod:`radar` package in production).
    """

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"})

    @app.route("/api/dashboard")
    def api_dashboard():
        """All analysis metrics, recompiled from the cached inputs on every call."""
        logger.info("Received request for dashboard metrics")
        try:
            metrics = service.get_dashboard(force_refresh=_force_refresh())
            payload = metrics_to_dict(metrics)
            payload["status"] = "success"
            logger.info(
                "Compiled dashboard with %d articles and %d trends",
                metrics.overview.total_articles,
                metrics.overview.total_trends,
            )
            return jsonify(payload)
        except Exception as exc:
            logger.error("Dashboard compilation failed: %s", exc, exc_info=True)
            return jsonify({"status": "error", "error": "Failed to compile dashboard"}), 500

    @app.route("/api/trends")
    def api_trends():
        try:
            metrics = service.get_dashboard(force_refresh=_force_refresh())
            return jsonify(
                {
                    "status": "success",
                    "synthesized": metrics.trends_synthesized,
                    "trends": [trend_to_dict(trend) for trend in metrics.trends],
                }
            )
        except Exception as exc:
            logger.error("Trend listing failed: %s", exc, exc_info=True)
            return jsonify({"status": "error", "error": "Failed to load trends"}), 500

    @app.route("/api/insights")
    def api_insights():
        try:
            metrics = service.get_dashboard(force_refresh=_force_refresh())
            return jsonify(
                {
                    "status": "success",
                    "synthesized": metrics.insights_synthesized,
                    "insights": [insight_to_dict(insight) for insight in metrics.insights],
                }
            )
        except Exception as exc:
            logger.error("Insight listing failed: %s", exc, exc_info=True)
            return jsonify({"status": "error", "error": "Failed to load insights"}), 500

    @app.route("/api/home")
    def api_home():
        """Featured story, top stories, topical sections and the latest list."""
        try:
            sections = service.get_home_sections(force_refresh=_force_refresh())
            payload = sections_to_dict(sections, datetime.now(timezone.utc))
            payload["status"] = "success"
            return jsonify(payload)
        except Exception as exc:
            logger.error("Home sections failed: %s", exc, exc_info=True)
            return jsonify({"status": "error", "error": "Failed to load articles"}), 500

    @app.route("/api/status")
    def api_status():
        try:
            payload = service.get_status()
            payload["status"] = "ok"
            return jsonify(payload)
        except Exception as exc:
            logger.error("Status check failed: %s", exc, exc_info=True)
            return jsonify({
                "status": "error",
                "error": "Failed to retrieve status",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }), 500

"""Main application module for the TrendRadar dashboard backend."""
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

# Load environment variables before the radar package reads its settings
load_dotenv(os.getenv("RADAR_DOTENV", ".env"))

_handlers = [logging.StreamHandler()]
_log_file = os.getenv("RADAR_LOG_FILE")
if _log_file:
    os.makedirs(os.path.dirname(_log_file) or ".", exist_ok=True)
    _handlers.append(logging.FileHandler(_log_file))

logging.basicConfig(
    level=os.getenv("RADAR_LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=_handlers,
)

logger = logging.getLogger("trendradar")

import radar  # noqa: E402
from api_routes import register_routes  # noqa: E402

# Constants
DEFAULT_PORT = 5000
DEFAULT_HOST = "127.0.0.1"

app = Flask(__name__)
CORS(app)

register_routes(app, radar)

if radar.SETTINGS.poll_enabled:
    radar.start_polling()

__all__ = ["app"]

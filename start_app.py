import os

from dotenv import load_dotenv

load_dotenv(os.getenv('RADAR_DOTENV', '.env'))

from app import DEFAULT_HOST, DEFAULT_PORT, app  # noqa: E402

if __name__ == '__main__':
    host = os.getenv('HOST', DEFAULT_HOST)
    port = int(os.getenv('PORT', DEFAULT_PORT))
    debug = os.getenv('DEBUG', 'False').lower() == 'true'

    from radar import SETTINGS

    print(f"Starting TrendRadar on {host}:{port}")
    print(f"  Upstream articles API: {SETTINGS.api_base_url}")
    print(f"  Background polling: {'every %ss' % SETTINGS.poll_interval_seconds if SETTINGS.poll_enabled else 'disabled'}")
    print(f"\nAccess URL: http://{host}:{port}/api/dashboard")

    app.run(host=host, port=port, debug=debug, threaded=True)

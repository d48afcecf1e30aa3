"""
main.py

Development server for the protected resource filter.

Configuration is read from the environment, see ProtectedResourceConfig:
  - PROTECTED_RESOURCES_BASE_PATH, PROTECTED_RESOURCES_SERVE_STRATEGY, SECRET_KEY
  - METADATA_BACKEND=redis together with REDIS_* for a Redis metadata store

In production, run `private_resources.main:app` under a WSGI server and
prefer the x_sendfile or x_accel_redirect strategy.
"""

import logging
import os

from private_resources.app_factory import create_app

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_HOST", "127.0.0.1")
    port = int(os.getenv("FLASK_PORT", 8000))
    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    app.run(host=host, port=port, debug=debug)

"""CLI entry point for the HTTP service.

Usage:
    python -m scripts.serve [--host 0.0.0.0] [--port 8080]
"""

import argparse
import logging
import os

from decaf.app import create_app
from decaf.config import load_settings
from decaf.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the Data-Driven Decaf endpoint")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    parser.add_argument(
        "--port", type=int, default=int(os.environ.get("PORT", "8080")), help="Port to listen on"
    )
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Starting on %s:%d (DB_TYPE=%s, project=%s)",
        args.host,
        args.port,
        settings.db_type or "<unset>",
        settings.project_id or "<unknown>",
    )
    app = create_app(settings)
    app.run(host=args.host, port=args.port, threaded=True)


if __name__ == "__main__":
    main()

"""CLI entry point that runs the aggregation once, without HTTP.

Usage:
    python -m scripts.check_decaf [--db-type CLOUD_SQL_MYSQL] [--mock]
"""

import argparse
import dataclasses
import json
import logging
import sys

from decaf.bond.client import HttpBondClient, MockBondClient
from decaf.config import load_settings
from decaf.errors import DecafError
from decaf.handler import handle_request
from decaf.logging_setup import configure_logging
from decaf.types import BackendKind

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Aggregate the coffee table and verify with Bond")
    parser.add_argument(
        "--db-type",
        choices=[k.value for k in BackendKind],
        help="Override DB_TYPE from the environment",
    )
    parser.add_argument("--mock", action="store_true", help="Use mock Bond client (for testing)")
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings.log_level)
    if args.db_type:
        settings = dataclasses.replace(settings, db_type=args.db_type)

    if args.mock:
        client = MockBondClient()
    else:
        client = HttpBondClient(settings.bond_url, timeout=settings.bond_timeout)

    try:
        result = handle_request(settings, client)
    except DecafError as e:
        logger.error("Error: %s", e)
        sys.exit(1)
    print(json.dumps(result.to_payload()))


if __name__ == "__main__":
    main()

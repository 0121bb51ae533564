"""One request, end to end: resolve backend, aggregate, verify."""

import dataclasses
import logging
from typing import Callable

from decaf import create_service
from decaf.aggregate import AggregateResult, run_query
from decaf.bond.client import BondClient
from decaf.config import Settings
from decaf.errors import VerificationFailed
from decaf.service import DatabaseService
from decaf.types import BackendKind, ConnectionInfo

logger = logging.getLogger(__name__)

ServiceFactory = Callable[[BackendKind, ConnectionInfo], DatabaseService]


def handle_request(
    settings: Settings,
    bond_client: BondClient,
    service_factory: ServiceFactory = create_service,
) -> AggregateResult:
    """Aggregate the coffee table for the configured backend and verify it with Bond.

    Raises a DecafError subclass on any failure; nothing is retried. The
    database connection is closed before this returns, on every path.
    """
    kind = BackendKind.parse(settings.db_type)
    info = ConnectionInfo.from_environ(settings.environ, default_project=settings.project_id)
    service = service_factory(kind, info)

    with service:
        result = run_query(service, sentinel_index=settings.sentinel_index)

    result = dataclasses.replace(result, project=settings.project_id, db=kind.value)
    logger.info("Result: %s", result)

    try:
        body = bond_client.verify(result)
    except VerificationFailed as e:
        if e.body is not None:
            logger.error("Bond verification failed. Body: %s", e.body.decode(errors="replace"))
        raise
    logger.info("Response: %s", body.decode(errors="replace"))
    return result

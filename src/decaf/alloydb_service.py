"""AlloyDB implementation of DatabaseService."""

import pg8000.dbapi
from google.cloud.alloydb.connector import Connector

from decaf.service import ConnectorService
from decaf.types import BackendKind, ConnectionInfo


class AlloyDBService(ConnectorService):
    """AlloyDB backend using the AlloyDB connector and pg8000.

    The connector opens the secure tunnel; pg8000 speaks the Postgres wire
    protocol over it. Needs a cluster on top of the common fields.
    """

    driver = "pg8000"
    driver_errors = (pg8000.dbapi.Error,)

    def __init__(self, info: ConnectionInfo):
        BackendKind.ALLOY_DB.validate(info)
        super().__init__(info)

    @property
    def target(self) -> str:
        i = self._info
        return (
            f"projects/{i.project}/locations/{i.region}"
            f"/clusters/{i.cluster}/instances/{i.instance}"
        )

    def _new_connector(self) -> Connector:
        return Connector()

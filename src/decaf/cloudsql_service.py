"""Cloud SQL implementations of DatabaseService (PostgreSQL and MySQL)."""

import pg8000.dbapi
import pymysql
from google.cloud.sql.connector import Connector

from decaf.rows import scan_columns
from decaf.service import ConnectorService


class _CloudSQLService(ConnectorService):
    @property
    def target(self) -> str:
        i = self._info
        return f"{i.project}:{i.region}:{i.instance}"

    def _new_connector(self) -> Connector:
        return Connector()


class CloudSQLPostgresService(_CloudSQLService):
    """Cloud SQL for PostgreSQL using the Cloud SQL connector and pg8000.

    Rows are read the same way as AlloyDB's.
    """

    driver = "pg8000"
    driver_errors = (pg8000.dbapi.Error,)


class CloudSQLMySQLService(_CloudSQLService):
    """Cloud SQL for MySQL using the Cloud SQL connector and PyMySQL.

    Rows are scanned strictly as (id, name, price).
    """

    driver = "pymysql"
    driver_errors = (pymysql.Error,)
    read_row = staticmethod(scan_columns)

    @property
    def redacted_dsn(self) -> str:
        i = self._info
        return f"{i.user}:***@cloudsql-mysql({self.target})/{i.db_name}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dsn={self.redacted_dsn!r})"

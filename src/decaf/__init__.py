"""Data-Driven Decaf: backend factory and public API."""

from decaf.errors import UnknownBackend
from decaf.service import DatabaseService
from decaf.types import BackendKind, ConnectionInfo


def create_service(kind: BackendKind, info: ConnectionInfo) -> DatabaseService:
    """Create the DatabaseService for a backend kind.

    Supported kinds:
    - ALLOY_DB            AlloyDB connector + pg8000 (needs DB_CLUSTER)
    - CLOUD_SQL_POSTGRES  Cloud SQL connector + pg8000
    - CLOUD_SQL_MYSQL     Cloud SQL connector + PyMySQL
    """
    kind.validate(info)
    if kind is BackendKind.ALLOY_DB:
        from decaf.alloydb_service import AlloyDBService

        return AlloyDBService(info)
    elif kind is BackendKind.CLOUD_SQL_POSTGRES:
        from decaf.cloudsql_service import CloudSQLPostgresService

        return CloudSQLPostgresService(info)
    elif kind is BackendKind.CLOUD_SQL_MYSQL:
        from decaf.cloudsql_service import CloudSQLMySQLService

        return CloudSQLMySQLService(info)
    else:
        raise UnknownBackend(f"Unknown DB type {kind}")


__all__ = ["create_service", "BackendKind", "ConnectionInfo", "DatabaseService"]

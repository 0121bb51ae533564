"""Abstract DatabaseService interface and the connector-backed base class."""

import logging
from abc import ABC, abstractmethod
from contextlib import closing
from typing import Any, Iterator

from decaf.errors import ConnectionFailed, QueryFailed
from decaf.rows import RowReader, read_values
from decaf.types import CoffeeRow, ConnectionInfo

logger = logging.getLogger(__name__)


class DatabaseService(ABC):
    """Backend-agnostic handle on the coffee table.

    Design principles:
    - Request-scoped: one service per request, closed before the request returns
    - Uniform rows: every backend yields CoffeeRow, whatever its driver returns
    - DB-agnostic: callers program against this ABC, never a concrete backend
    """

    def __init__(self, info: ConnectionInfo):
        self._info = info

    @property
    @abstractmethod
    def target(self) -> str:
        """The connector dial target for this backend."""

    @abstractmethod
    def connect(self) -> None:
        """Dial the database. Raises ConnectionFailed on any failure."""

    @abstractmethod
    def close(self) -> None:
        """Close the connection and release the connector. Safe to call twice."""

    @abstractmethod
    def fetch_rows(self, sql: str) -> Iterator[CoffeeRow]:
        """Execute ``sql`` and yield each row. Raises QueryFailed on driver errors."""

    def __enter__(self) -> "DatabaseService":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target={self.target!r})"


class ConnectorService(DatabaseService):
    """Dials through a managed connector and reads rows over DB-API.

    Subclasses pick the connector, the driver name and the row reader.
    """

    driver = ""
    driver_errors: tuple[type[BaseException], ...] = ()
    read_row: RowReader = staticmethod(read_values)

    def __init__(self, info: ConnectionInfo):
        super().__init__(info)
        self._connector: Any = None
        self._conn: Any = None

    @abstractmethod
    def _new_connector(self) -> Any:
        """Create the connector used to open the tunnel."""

    def connect(self) -> None:
        logger.info("Connecting %r using %s", self, self.driver)
        try:
            self._connector = self._new_connector()
            self._conn = self._connector.connect(
                self.target,
                self.driver,
                user=self._info.user,
                password=self._info.password,
                db=self._info.db_name,
            )
        except Exception as e:
            self.close()
            raise ConnectionFailed(f"failed to connect to {self.target}: {e}") from e

    def close(self) -> None:
        conn, self._conn = self._conn, None
        connector, self._connector = self._connector, None
        try:
            if conn is not None:
                conn.close()
        finally:
            if connector is not None:
                connector.close()

    def _get_conn(self) -> Any:
        if self._conn is not None:
            return self._conn
        raise RuntimeError("Not connected. Wrap calls in a `with service:` block.")

    def fetch_rows(self, sql: str) -> Iterator[CoffeeRow]:
        conn = self._get_conn()
        try:
            with closing(conn.cursor()) as cur:
                cur.execute(sql)
                for row in cur:
                    yield self.read_row(row)
        except (*self.driver_errors, OSError, IndexError, ValueError) as e:
            raise QueryFailed(f"query failed: {e}") from e

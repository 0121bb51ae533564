"""Shared types for the decaf package."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, NamedTuple

from decaf.errors import ClusterRequired, ConfigurationMissing, UnknownBackend


class CoffeeRow(NamedTuple):
    """One row of the coffee table, as emitted by every backend's reader."""

    name: str
    price: str


@dataclass(frozen=True)
class ConnectionInfo:
    user: str
    password: str = field(repr=False)
    db_name: str
    region: str
    instance: str
    project: str
    cluster: str = ""

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str] | None = None, default_project: str = ""
    ) -> "ConnectionInfo":
        """Build connection parameters from DB_* variables.

        DB_USER, DB_PASS, DB_NAME and DB_INSTANCE are required; DB_PROJECT
        falls back to ``default_project``.
        """
        env = os.environ if environ is None else environ
        user = env.get("DB_USER", "")
        password = env.get("DB_PASS", "")
        db_name = env.get("DB_NAME", "")
        instance = env.get("DB_INSTANCE", "")
        if not (user and password and db_name and instance):
            raise ConfigurationMissing(
                "ensure required environment variables are set "
                "(DB_USER, DB_PASS, DB_NAME, DB_INSTANCE)"
            )
        return cls(
            user=user,
            password=password,
            db_name=db_name,
            region=env.get("DB_REGION", ""),
            instance=instance,
            project=env.get("DB_PROJECT", "") or default_project,
            cluster=env.get("DB_CLUSTER", ""),
        )


class BackendKind(Enum):
    """Which managed database a request talks to. Values are DB_TYPE literals."""

    ALLOY_DB = "ALLOY_DB"
    CLOUD_SQL_POSTGRES = "CLOUD_SQL_POSTGRES"
    CLOUD_SQL_MYSQL = "CLOUD_SQL_MYSQL"

    @classmethod
    def parse(cls, value: str | None) -> "BackendKind":
        try:
            return cls(value)
        except ValueError:
            raise UnknownBackend(f"Unknown DB type {value or ''}") from None

    def validate(self, info: ConnectionInfo) -> None:
        """Check the fields this backend needs beyond the common ones."""
        if self is BackendKind.ALLOY_DB and not info.cluster:
            raise ClusterRequired(
                "cluster required for this backend (set DB_CLUSTER for ALLOY_DB)"
            )

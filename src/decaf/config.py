"""Process-wide settings, read once from the environment at startup."""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

import google.auth
from google.auth.exceptions import DefaultCredentialsError

from decaf.aggregate import SENTINEL_INDEX
from decaf.bond.client import DEFAULT_BOND_URL
from decaf.errors import ConfigurationMissing

logger = logging.getLogger(__name__)


def detect_project_id(environ: Mapping[str, str]) -> str:
    """Project of the platform we run on: GOOGLE_CLOUD_PROJECT, then ADC."""
    project = environ.get("GOOGLE_CLOUD_PROJECT", "")
    if project:
        return project
    try:
        _, project = google.auth.default()
    except DefaultCredentialsError as e:
        logger.warning("Could not detect project id: %s", e)
        return ""
    return project or ""


def _env_number(environ: Mapping[str, str], key: str, default, cast):
    val = environ.get(key)
    if not val:
        return default
    try:
        return cast(val)
    except ValueError:
        raise ConfigurationMissing(f"{key} must be a number, got {val!r}") from None


@dataclass(frozen=True)
class Settings:
    db_type: str
    bond_url: str
    project_id: str
    sentinel_index: int = SENTINEL_INDEX
    bond_timeout: float = 10.0
    log_level: str = "INFO"
    # Startup snapshot of the environment; per-request DB_* parameters come from here.
    environ: Mapping[str, str] = field(default_factory=dict, repr=False)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        db_type=env.get("DB_TYPE", ""),
        bond_url=env.get("BOND_SERVICE_URL", "") or DEFAULT_BOND_URL,
        project_id=detect_project_id(env),
        sentinel_index=_env_number(env, "DECAF_SENTINEL_INDEX", SENTINEL_INDEX, int),
        bond_timeout=_env_number(env, "BOND_TIMEOUT_SECONDS", 10.0, float),
        log_level=env.get("LOG_LEVEL", "INFO"),
        environ=dict(env),
    )

"""Bond verification service: API client."""

from decaf.bond.client import (
    DEFAULT_BOND_URL,
    VERIFY_ENDPOINT,
    BondClient,
    HttpBondClient,
    MockBondClient,
)

__all__ = [
    "BondClient",
    "HttpBondClient",
    "MockBondClient",
    "DEFAULT_BOND_URL",
    "VERIFY_ENDPOINT",
]

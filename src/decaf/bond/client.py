"""Bond verification service client with mock support."""

import logging
from abc import ABC, abstractmethod

import requests

from decaf.aggregate import AggregateResult
from decaf.errors import VerificationFailed

logger = logging.getLogger(__name__)

DEFAULT_BOND_URL = "https://bond-service-l5xebjflvq-ew.a.run.app"
VERIFY_ENDPOINT = "/v1/data_driven_decaf/verify"


class BondClient(ABC):
    """Abstract interface for verifying an aggregate with Bond."""

    @abstractmethod
    def verify(self, result: AggregateResult) -> bytes:
        """Send ``result`` to Bond for verification.

        Args:
            result: The finished aggregate, including project and db metadata.

        Returns:
            The raw response body. It is only ever logged.

        Raises:
            VerificationFailed: on transport errors or a non-2xx status.
        """


class HttpBondClient(BondClient):
    """Real Bond client. A single POST, no retries."""

    def __init__(self, base_url: str = DEFAULT_BOND_URL, timeout: float = 10.0):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def verify_url(self) -> str:
        return self._base_url + VERIFY_ENDPOINT

    def verify(self, result: AggregateResult) -> bytes:
        logger.info("Verifying with %s", self.verify_url)
        try:
            resp = requests.post(
                self.verify_url,
                json=result.to_payload(),
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise VerificationFailed(f"bond request failed: {e}") from e

        if not 200 <= resp.status_code <= 299:
            raise VerificationFailed(
                f"expected 2xx response from bond, got {resp.status_code}",
                body=resp.content,
            )
        return resp.content


class MockBondClient(BondClient):
    """Mock client that accepts everything and records what it was sent."""

    MOCK_RESPONSE = b'{"verified": true}'

    def __init__(self) -> None:
        self.payloads: list[dict] = []

    def verify(self, result: AggregateResult) -> bytes:
        self.payloads.append(result.to_payload())
        return self.MOCK_RESPONSE

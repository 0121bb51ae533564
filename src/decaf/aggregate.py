"""Coffee table aggregation: running price total and the magic coffee."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable

from decaf.service import DatabaseService
from decaf.types import CoffeeRow

logger = logging.getLogger(__name__)

DEFAULT_QUERY = "select * from coffee"

_INTEGER = re.compile(r"[+-]?[0-9]+")

# Zero-based iteration position of the magic coffee row, i.e. the 51st row.
# Skipped rows still count towards the position.
SENTINEL_INDEX = 50


@dataclass(frozen=True)
class AggregateResult:
    magic_coffee: str = ""
    total: int = 0
    project: str = ""
    db: str = ""

    def to_payload(self) -> dict[str, Any]:
        """JSON body for Bond and the HTTP caller. Empty fields are omitted."""
        payload = {
            "magic_coffee": self.magic_coffee,
            "total": self.total,
            "project": self.project,
            "db": self.db,
        }
        return {k: v for k, v in payload.items() if v}


def parse_price(price: str) -> int:
    """Integer part of a price string: "4.50" -> 4.

    Raises ValueError when the part before the first "." is not a plain
    ASCII integer; whitespace, underscores and non-ASCII digits are rejected.
    """
    head = price.split(".", 1)[0]
    if not _INTEGER.fullmatch(head):
        raise ValueError(f"invalid integer part {head!r}")
    return int(head)


def aggregate(rows: Iterable[CoffeeRow], sentinel_index: int = SENTINEL_INDEX) -> AggregateResult:
    magic_coffee = ""
    total = 0
    for i, row in enumerate(rows):
        if i == sentinel_index:
            magic_coffee = row.name
        try:
            total += parse_price(row.price)
        except ValueError:
            logger.warning("Skipping row %d: could not convert price %r to an integer", i, row.price)
    return AggregateResult(magic_coffee=magic_coffee, total=total)


def run_query(
    service: DatabaseService,
    sql: str = DEFAULT_QUERY,
    sentinel_index: int = SENTINEL_INDEX,
) -> AggregateResult:
    """Run ``sql`` on a connected service and aggregate the rows it returns."""
    result = aggregate(service.fetch_rows(sql), sentinel_index)
    logger.info("Aggregated %r: total=%d magic_coffee=%r", service, result.total, result.magic_coffee)
    return result

"""Row readers: turn a driver row into a CoffeeRow.

Both readers expose the same shape upward; they differ only in how strictly
they treat the driver's row.
"""

from typing import Any, Callable, Sequence

from decaf.types import CoffeeRow

RowReader = Callable[[Sequence[Any]], CoffeeRow]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def read_values(row: Sequence[Any]) -> CoffeeRow:
    """Postgres drivers hand back generic values; name and price sit at 1 and 2."""
    return CoffeeRow(name=_text(row[1]), price=_text(row[2]))


def scan_columns(row: Sequence[Any]) -> CoffeeRow:
    """Strict (id, name, price) scan used for MySQL."""
    if len(row) != 3:
        raise ValueError(f"expected 3 columns (id, name, price), got {len(row)}")
    _, name, price = row
    return CoffeeRow(name=_text(name), price=_text(price))

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import astuple, dataclass

"""Record model for the pipeline throughput dataset.

A Record is one flattened throughput observation (Keystone pipeline open data).
Columns are positional: the CSV header is never used for mapping, so the
order of COLUMN_SPECS is the contract for both reading and writing.

Numeric coercion policy:
- empty text -> 0
- non-numeric or non-finite text -> 0 (callers report it, see
  dataset.reader.invalid_numeric_columns)
Text columns are stripped and default to "".
"""

__all__ = [
    "COLUMN_SPECS",
    "COLUMN_TITLES",
    "FIELD_COUNT",
    "Record",
    "RecordFieldCountError",
    "RecordInputError",
    "coerce_float",
    "coerce_int",
    "format_number",
]


class RecordInputError(Exception):
    """Raised when user supplied record text cannot be turned into a Record."""


class RecordFieldCountError(RecordInputError):
    """Raised when a row does not carry exactly FIELD_COUNT fields."""

    def __init__(self, count: int) -> None:
        super().__init__(f"expected {FIELD_COUNT} fields, got {count}")
        self.count = count


# (attribute, column title, kind) in file order. kind: "str" | "int" | "float"
COLUMN_SPECS: tuple[tuple[str, str, str], ...] = (
    ("date", "Date", "str"),
    ("month", "Month", "int"),
    ("year", "Year", "int"),
    ("company", "Company", "str"),
    ("pipeline", "Pipeline", "str"),
    ("key_point", "Key Point", "str"),
    ("latitude", "Latitude", "float"),
    ("longitude", "Longitude", "float"),
    ("direction_of_flow", "Direction Of Flow", "str"),
    ("trade_type", "Trade Type", "str"),
    ("product", "Product", "str"),
    ("throughput", "Throughput (1000 m3/d)", "float"),
    ("committed_volumes", "Committed Volumes (1000 m3/d)", "float"),
    ("uncommitted_volumes", "Uncommitted Volumes (1000 m3/d)", "float"),
    ("nameplate_capacity", "Nameplate Capacity (1000 m3/d)", "float"),
    ("available_capacity", "Available Capacity (1000 m3/d)", "float"),
    ("reason_for_variance", "Reason For Variance", "str"),
)

COLUMN_TITLES: tuple[str, ...] = tuple(title for _, title, _ in COLUMN_SPECS)
FIELD_COUNT = len(COLUMN_SPECS)


def coerce_float(value: object) -> float:
    """Parse a float, resolving empty, invalid and non-finite input to 0.0."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
    else:
        text = str(value).strip()
        if text == "":
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_int(value: object) -> int:
    """Parse an int via coerce_float (so "3.0" is accepted), truncating decimals."""
    return int(coerce_float(value))


def format_number(value: int | float) -> str:
    """Render a number without a trailing '.0' when it is integral.

    >>> format_number(100.0)
    '100'
    >>> format_number(48.123)
    '48.123'
    >>> format_number(0)
    '0'
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Record:
    """One pipeline throughput observation (17 positional columns).

    Volumes and capacities are in 1000 m3/day. Nothing here is validated
    beyond type coercion: duplicates and out-of-range months are accepted.
    """
    date: str
    month: int
    year: int
    company: str
    pipeline: str
    key_point: str  # named measurement location
    latitude: float
    longitude: float
    direction_of_flow: str
    trade_type: str  # e.g. export / import
    product: str
    throughput: float
    committed_volumes: float
    uncommitted_volumes: float
    nameplate_capacity: float
    available_capacity: float
    reason_for_variance: str = ""

    @classmethod
    def from_fields(cls, fields: Sequence[object]) -> Record:
        """Build a Record from exactly FIELD_COUNT positional values.

        Args:
            fields: Raw column values in file order (usually strings)

        Returns:
            New Record with numeric columns coerced

        Raises:
            RecordFieldCountError: If len(fields) != FIELD_COUNT
        """
        if len(fields) != FIELD_COUNT:
            raise RecordFieldCountError(len(fields))
        values: dict[str, object] = {}
        for (attr, _, kind), raw in zip(COLUMN_SPECS, fields, strict=True):
            if kind == "int":
                values[attr] = coerce_int(raw)
            elif kind == "float":
                values[attr] = coerce_float(raw)
            else:
                values[attr] = "" if raw is None else str(raw).strip()
        return cls(**values)  # type: ignore[arg-type]

    def to_fields(self) -> list[str]:
        """Return the 17 values as text in column order (numbers via format_number)."""
        out: list[str] = []
        for (_, _, kind), value in zip(COLUMN_SPECS, astuple(self), strict=True):
            out.append(value if kind == "str" else format_number(value))
        return out

from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from throughput_records.models.record import COLUMN_TITLES, Record

"""CSV writer for the throughput dataset.

Output mirrors what reader.load_dataset accepts:
- first line is COLUMN_TITLES
- one line per record, values rendered by Record.to_fields()
- the header line is unquoted (the titles hold no delimiter)
- every data field is wrapped in double quotes with embedded quotes doubled,
  so commas, quotes and line breaks (carriage returns too) stay inside one row
- the target file is truncated (never appended to)
"""

__all__ = [
    "DatasetWriteError",
    "save_dataset",
]

logger = logging.getLogger(__name__)


class DatasetWriteError(Exception):
    """Raised when the dataset cannot be written. In-memory data is unaffected."""


def records_to_frame(records: Sequence[Record]) -> pd.DataFrame:
    """Tabulate records as text columns titled with COLUMN_TITLES."""
    return pd.DataFrame(
        [r.to_fields() for r in records],
        columns=list(COLUMN_TITLES),
        dtype=object,
    )


def save_dataset(records: Sequence[Record], path: Path) -> Path:
    """Write ``records`` to ``path``, replacing any previous content.

    Args:
        records: Ordered records to serialize
        path: Output CSV path (parent directories are created)

    Returns:
        The path written

    Raises:
        DatasetWriteError: The directory or file could not be written
    """
    path = Path(path)
    frame = records_to_frame(records)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as f:
            frame.head(0).to_csv(f, index=False, lineterminator="\n")
            frame.to_csv(
                f,
                index=False,
                header=False,
                quoting=csv.QUOTE_NONNUMERIC,
                lineterminator="\n",
            )
    except OSError as e:
        raise DatasetWriteError(f"cannot write {path}: {e}") from e
    logger.info(f"Dataset saved to {path} ({len(records)} records)")
    return path

from __future__ import annotations

import io
import logging
import math
import warnings
from pathlib import Path
from typing import Any

import pandas as pd

from throughput_records.logging.error_log import ErrorLogBuffer
from throughput_records.models.error_record import ErrorRecord
from throughput_records.models.record import (
    COLUMN_SPECS,
    FIELD_COUNT,
    Record,
    RecordInputError,
)
from throughput_records.services.progress import track_rows

"""CSV reader for the throughput dataset.

Layout rules:
- line 1 is a header and is skipped without validation
- every following non-blank line maps positionally onto the 17 columns
- commas inside double quotes are literal, ``""`` inside quotes is one quote,
  whitespace before an opening quote is ignored
- short lines are padded with empty fields; fields past the 17th are ignored
- lines the tokenizer rejects are skipped and reported, never fatal

The same tokenizer settings parse single lines typed into the editor, so a
row written by the writer reads back identically from either path.
"""

__all__ = [
    "DatasetLoadError",
    "invalid_numeric_columns",
    "load_dataset",
    "parse_input_line",
]

logger = logging.getLogger(__name__)

# Shared tokenizer settings (python engine: per-line error recovery)
_CSV_OPTIONS: dict[str, Any] = {
    "sep": ",",
    "quotechar": '"',
    "doublequote": True,
    "skipinitialspace": True,
    "keep_default_na": False,
    "engine": "python",
}


class DatasetLoadError(Exception):
    """Raised when the dataset file cannot be read at all.

    Distinct from an empty dataset, which loads as an empty list.
    """


def _cell_text(value: Any) -> str:
    """Normalize one parsed cell to stripped text ('' for padded/missing cells)."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def invalid_numeric_columns(fields: list[str]) -> list[str]:
    """Return titles of numeric columns whose non-empty text is not a finite number.

    Those values are zero-defaulted by Record.from_fields; callers use this to
    report what was replaced.
    """
    bad: list[str] = []
    for (_, title, kind), raw in zip(COLUMN_SPECS, fields, strict=False):
        if kind == "str":
            continue
        text = raw.strip()
        if text == "":
            continue
        try:
            number = float(text)
        except ValueError:
            bad.append(title)
            continue
        if not math.isfinite(number):
            bad.append(title)
    return bad


def _read_frame(path: Path, error_log: ErrorLogBuffer | None) -> pd.DataFrame:
    """Tokenize ``path`` into FIELD_COUNT text columns plus one overflow column.

    The overflow column holds the first field past the 17th. It is missing
    (NaN) for rows of 17 fields or fewer, so a present value marks a long row.
    """
    converters = {i: _cell_text for i in range(FIELD_COUNT)}
    names = list(range(FIELD_COUNT + 1))
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", pd.errors.ParserWarning)
        try:
            frame = pd.read_csv(
                path,
                header=None,
                skiprows=1,
                names=names,
                index_col=False,
                converters=converters,
                skip_blank_lines=True,
                on_bad_lines="warn",
                encoding="utf-8",
                **_CSV_OPTIONS,
            )
        except pd.errors.EmptyDataError:
            frame = pd.DataFrame(columns=names)
    for w in caught:
        if not issubclass(w.category, pd.errors.ParserWarning):
            continue
        message = str(w.message).strip()
        logger.warning(f"{path.name}: {message}")
        if error_log is not None:
            error_log.append(ErrorRecord.create(str(path), -1, "MALFORMED_LINE", message))
    return frame


def load_dataset(
    path: Path,
    error_log: ErrorLogBuffer | None = None,
    show_progress: bool | None = None,
) -> list[Record]:
    """Load the dataset file into an ordered list of Records.

    Parameters
    ----------
    path: CSV file path
    error_log: buffer receiving an ErrorRecord for every skipped or repaired row
    show_progress: force the row progress bar on/off (None: TTY only)

    Raises
    ------
    DatasetLoadError: the file is missing, unreadable or cannot be tokenized
    """
    path = Path(path)
    if not path.exists():
        raise DatasetLoadError(f"dataset not found: {path}")
    try:
        frame = _read_frame(path, error_log)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise DatasetLoadError(f"cannot read dataset {path}: {e}") from e

    records: list[Record] = []
    rows = frame.itertuples(index=False, name=None)
    for position, raw in enumerate(track_rows(rows, len(frame), enabled=show_progress), start=1):
        *cells, overflow = raw
        fields = [_cell_text(v) for v in cells]
        if not pd.isna(overflow):
            message = f"fields past the {FIELD_COUNT}th ignored"
            logger.warning(f"{path.name}: row {position} {message}")
            if error_log is not None:
                error_log.append(ErrorRecord.create(str(path), position, "EXTRA_FIELDS_IGNORED", message))
        try:
            bad_columns = invalid_numeric_columns(fields)
            record = Record.from_fields(fields)
        except Exception as e:
            logger.warning(f"{path.name}: row {position} skipped: {e}")
            if error_log is not None:
                error_log.append(ErrorRecord.create(str(path), position, "ROW_PARSE_ERROR", str(e)))
            continue
        if bad_columns:
            message = f"non-numeric values replaced by 0: {', '.join(bad_columns)}"
            logger.debug(f"{path.name}: row {position} {message}")
            if error_log is not None:
                error_log.append(ErrorRecord.create(str(path), position, "INVALID_NUMBER", message))
        records.append(record)

    logger.info(f"Successfully loaded {len(records)} records from {path}")
    return records


def parse_input_line(text: str) -> list[str]:
    """Split one line of user input into stripped fields.

    Uses the loader's quoting rules. The caller checks the field count.

    Raises:
        RecordInputError: empty input or a line the tokenizer rejects
    """
    if text is None or not text.strip():
        raise RecordInputError("no input provided")
    try:
        frame = pd.read_csv(
            io.StringIO(text.strip()),
            header=None,
            dtype=str,
            on_bad_lines="error",
            **_CSV_OPTIONS,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise RecordInputError(f"cannot parse input: {e}") from e
    if len(frame) != 1:
        raise RecordInputError(f"expected a single line, got {len(frame)} rows")
    return [_cell_text(v) for v in frame.iloc[0].tolist()]

"""Domain models for the pipeline throughput record editor.

This package contains the dataset row model plus the small result and
diagnostic records passed between the loader, the editor and the CLI.
"""

from .error_record import ErrorRecord
from .record import (
    COLUMN_TITLES,
    FIELD_COUNT,
    Record,
    RecordFieldCountError,
    RecordInputError,
)
from .session_result import SessionResult

__all__ = [
    # Dataset row
    "COLUMN_TITLES",
    "FIELD_COUNT",
    "Record",
    "RecordFieldCountError",
    "RecordInputError",
    # Diagnostics / results
    "ErrorRecord",
    "SessionResult",
]

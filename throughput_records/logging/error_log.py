from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from throughput_records.models.error_record import ErrorRecord

"""Error log buffering for rows skipped during a load.

- JSON Lines, fixed keys (see ErrorRecord)
- one file per run: ``<logs_dir>/errors-YYYYMMDD-HHMMSS.log`` (UTC), created
  lazily on the first flush that has something to write
- records are buffered and appended on flush()
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "flush_and_report",
]

logger = logging.getLogger(__name__)

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush appends JSON Lines.

    Single-threaded use only (the editor runs one command at a time).
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file and clear the buffer.

        Returns:
            The log file path, or None when there was nothing to write
        """
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp


def flush_and_report(buffer: ErrorLogBuffer | None) -> Path | None:
    """Flush ``buffer`` and log a WARN naming the file when anything was written."""
    if buffer is None:
        return None
    count = len(buffer)
    fp = buffer.flush()
    if fp is not None:
        logger.warning(f"{count} row issue(s) written to {fp}")
    return fp

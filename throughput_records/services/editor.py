from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from ..dataset.reader import (
    DatasetLoadError,
    invalid_numeric_columns,
    load_dataset,
    parse_input_line,
)
from ..dataset.writer import DatasetWriteError, save_dataset
from ..logging.error_log import ErrorLogBuffer, flush_and_report
from ..models.record import FIELD_COUNT, Record, RecordFieldCountError, RecordInputError
from ..models.session_result import SessionResult
from .display import colorize, make_view

"""Interactive record editor (menu loop).

The editor owns the in-memory dataset for one session and runs one command at
a time to completion:

    menu -> choice -> (list | create | update | delete | reload | save) -> menu
    menu -> exit (or end of input) -> run() returns the final list

Input arrives through a ``prompt_line(message) -> str`` callable and output
leaves through ``emit(text)``, so the whole loop can be driven by a scripted
list of lines. Every command leaves the dataset either unchanged or fully
updated; rejected input is logged as ERROR and control returns to the menu.
"""

__all__ = [
    "MENU_OPTIONS",
    "RecordEditor",
]

logger = logging.getLogger(__name__)

PromptLine = Callable[[str], str]
Emit = Callable[[str], None]
Loader = Callable[..., list[Record]]
Saver = Callable[..., Path]

MENU_OPTIONS: tuple[tuple[str, str], ...] = (
    ("1", "Display all records"),
    ("2", "Create new record"),
    ("3", "Update a record"),
    ("4", "Delete a record"),
    ("5", "Reload dataset"),
    ("6", "Save dataset to file"),
    ("7", "Exit"),
)
EXIT_CHOICE = "7"


class RecordEditor:
    """Menu driven create/update/delete loop over a list of Records."""

    def __init__(
        self,
        records: Iterable[Record],
        source_path: Path,
        output_path: Path,
        prompt_line: PromptLine = input,
        emit: Emit = print,
        *,
        list_style: str = "full",
        interactive: bool = False,
        error_log: ErrorLogBuffer | None = None,
        loader: Loader = load_dataset,
        saver: Saver = save_dataset,
    ) -> None:
        self.source_path = Path(source_path)
        self.output_path = Path(output_path)
        if self.source_path.resolve() == self.output_path.resolve():
            raise ValueError(f"output path must differ from the source dataset: {self.output_path}")
        self.records: list[Record] = list(records)
        self.list_style = list_style
        self.interactive = interactive
        self.error_log = error_log
        self.result = SessionResult(records=len(self.records))
        self._prompt = prompt_line
        self._emit = emit
        self._loader = loader
        self._saver = saver
        self._handlers: dict[str, Callable[[], None]] = {
            "1": self.list_records,
            "2": self.create_record,
            "3": self.update_record,
            "4": self.delete_record,
            "5": self.reload_dataset,
            "6": self.save_dataset,
        }

    # ------------------------------------------------------------------ loop
    def run(self) -> list[Record]:
        """Run the menu loop until Exit or end of input; return the final records."""
        while True:
            self._emit(self.menu_text())
            try:
                choice = self._prompt("Choose an option: ").strip()
            except EOFError:
                break
            if choice == EXIT_CHOICE:
                break
            handler = self._handlers.get(choice)
            if handler is None:
                self._reject("Invalid choice!")
                continue
            try:
                handler()
            except EOFError:
                # input closed mid-command: the pending command is dropped
                break
        self.result.records = len(self.records)
        logger.debug(f"editor finished with {len(self.records)} records")
        return self.records

    def menu_text(self) -> str:
        lines = [colorize("--- Menu ---", "heading", self.interactive)]
        lines.extend(f"{key}. {label}" for key, label in MENU_OPTIONS)
        return "\n" + "\n".join(lines)

    # -------------------------------------------------------------- commands
    def list_records(self) -> None:
        """Emit every record, numbered from 1. Does not touch the dataset."""
        if not self.records:
            self._emit("No records loaded.")
            return
        for number, record in enumerate(self.records, start=1):
            self._emit(colorize(f"\nRecord {number}:", "heading", self.interactive))
            view = make_view(record, self.list_style, self.interactive)
            self._emit(view.render_summary())

    def create_record(self) -> None:
        """Append a record parsed from one line of comma separated input."""
        line = self._prompt(f"Enter record details (comma-separated values for all {FIELD_COUNT} fields): ")
        record = self._parse_record(line)
        if record is None:
            return
        self.records.append(record)
        self.result.created += 1
        logger.info("Record added successfully!")

    def update_record(self) -> None:
        """Replace the record at a 1-based position with a newly parsed one."""
        index = self._prompt_index("update")
        if index is None:
            return
        line = self._prompt(f"Enter updated details (comma-separated values for all {FIELD_COUNT} fields): ")
        record = self._parse_record(line)
        if record is None:
            return
        self.records[index] = record
        self.result.updated += 1
        logger.info(f"Record {index + 1} updated successfully!")

    def delete_record(self) -> None:
        """Remove the record at a 1-based position; later records shift down."""
        index = self._prompt_index("delete")
        if index is None:
            return
        del self.records[index]
        self.result.deleted += 1
        logger.info(f"Record {index + 1} deleted successfully!")

    def reload_dataset(self) -> None:
        """Replace the dataset with a fresh load of the source file.

        On failure the current records are kept.
        """
        try:
            records = self._loader(self.source_path, self.error_log)
        except DatasetLoadError as e:
            self._reject(f"Error reloading dataset: {e}")
            return
        finally:
            flush_and_report(self.error_log)
        self.records = records
        self.result.reloads += 1
        logger.info("Dataset reloaded successfully!")

    def save_dataset(self) -> None:
        """Write the dataset to the output path. On failure memory is untouched."""
        try:
            self._saver(self.records, self.output_path)
        except DatasetWriteError as e:
            self._reject(f"Error saving dataset: {e}")
            return
        self.result.saves += 1

    # --------------------------------------------------------------- helpers
    def _reject(self, message: str) -> None:
        self.result.errors += 1
        logger.error(message)

    def _prompt_index(self, action: str) -> int | None:
        """Ask for a 1-based record number; return the 0-based index or None."""
        text = self._prompt(f"Enter the record number to {action}: ").strip()
        try:
            number = int(text)
        except ValueError:
            self._reject(f"Invalid record number! ({text!r} is not a number)")
            return None
        if not 1 <= number <= len(self.records):
            self._reject(f"Invalid record number! (expected 1-{len(self.records)}, got {number})")
            return None
        return number - 1

    def _parse_record(self, line: str) -> Record | None:
        try:
            fields = parse_input_line(line)
            record = Record.from_fields(fields)
        except RecordFieldCountError as e:
            self._reject(f"Please enter exactly {FIELD_COUNT} fields. You entered {e.count}.")
            return None
        except RecordInputError as e:
            self._reject(f"Error parsing input: {e}")
            return None
        bad_columns = invalid_numeric_columns(fields)
        if bad_columns:
            logger.warning(f"non-numeric values replaced by 0: {', '.join(bad_columns)}")
        return record

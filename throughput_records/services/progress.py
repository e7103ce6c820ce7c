from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from typing import TypeVar

from tqdm import tqdm

"""Progress display with tqdm (TTY only).

Loading a large dataset shows a single row progress bar on an interactive
terminal. In non-TTY environments (pipes, CI, tests) the bar is disabled so
no ANSI control sequences leak into captured output.
"""

__all__ = [
    "is_tty_enabled",
    "track_rows",
]

T = TypeVar("T")


def is_tty_enabled() -> bool:
    """Return True when stdout is an interactive terminal."""
    return sys.stdout.isatty()


def track_rows(
    rows: Iterable[T],
    total: int,
    *,
    description: str = "Loading records",
    enabled: bool | None = None,
) -> Iterator[T]:
    """Yield ``rows`` while advancing a tqdm bar when enabled.

    Args:
        rows: Row iterable to wrap
        total: Expected number of rows (bar length)
        description: Bar description
        enabled: Force the bar on/off. None means "only on a TTY"
    """
    if enabled is None:
        enabled = is_tty_enabled()
    if not enabled:
        yield from rows
        return
    pbar = tqdm(
        rows,
        total=total,
        desc=description,
        unit="row",
        leave=False,
        ncols=80,  # Standard width for consistency
        ascii=True,  # ASCII chars for better compatibility
    )
    try:
        yield from pbar
    finally:
        pbar.close()

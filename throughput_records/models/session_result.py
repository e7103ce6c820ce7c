from __future__ import annotations

from dataclasses import dataclass

"""Counters collected over one interactive editing session.

Rendered as the SUMMARY line when the editor exits.
"""

__all__ = [
    "SessionResult",
]


@dataclass
class SessionResult:
    """Mutable tally of what happened to the in-memory dataset."""
    records: int = 0  # records held when the session ended
    created: int = 0
    updated: int = 0
    deleted: int = 0
    reloads: int = 0  # successful reloads only
    saves: int = 0  # successful saves only
    errors: int = 0  # rejected input, failed reloads/saves

from __future__ import annotations

from ..models.session_result import SessionResult

"""SUMMARY line rendering for an editing session."""


def render_summary_line(result: SessionResult) -> str:
    """Render the SUMMARY line printed when the editor exits.

    Format:
    SUMMARY records={n} created={c} updated={u} deleted={d} reloads={r}
    saves={s} errors={e}

    Examples:
        >>> render_summary_line(SessionResult(records=3, created=1))
        'SUMMARY records=3 created=1 updated=0 deleted=0 reloads=0 saves=0 errors=0'
    """
    return (
        f"SUMMARY records={result.records} "
        f"created={result.created} "
        f"updated={result.updated} "
        f"deleted={result.deleted} "
        f"reloads={result.reloads} "
        f"saves={result.saves} "
        f"errors={result.errors}"
    )

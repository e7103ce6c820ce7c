from __future__ import annotations

from typing import Protocol

from rich.color import ColorSystem
from rich.style import Style

from throughput_records.models.record import COLUMN_SPECS, Record, format_number

"""Record rendering for the terminal.

Placeholder policy: only true absence (None or "") renders as "N/A". Zero is a
measured value and renders as "0".

Views are chosen when they are built (make_view) instead of through a class
hierarchy: every view only needs ``render_summary()``.
"""

__all__ = [
    "BasicView",
    "DetailedView",
    "Displayable",
    "FullView",
    "LIST_STYLES",
    "PLACEHOLDER",
    "colorize",
    "display_value",
    "make_view",
    "render_record",
]

PLACEHOLDER = "N/A"

LIST_STYLES = ("full", "detailed", "basic")

ROLE_STYLES: dict[str, Style] = {
    "label": Style(color="blue"),
    "value": Style(color="green"),
    "heading": Style(color="yellow"),
    "success": Style(color="green"),
    "error": Style(color="red"),
    "banner": Style(bold=True, bgcolor="bright_cyan"),
}


def colorize(text: str, role: str, interactive: bool) -> str:
    """Wrap ``text`` in the ANSI style for ``role`` when output is interactive.

    Pure function: non-interactive output and unknown roles return text as-is.
    """
    if not interactive:
        return text
    style = ROLE_STYLES.get(role)
    if style is None:
        return text
    return style.render(text, color_system=ColorSystem.STANDARD)


def display_value(value: object) -> str:
    """Render one field value, using PLACEHOLDER only for None or ''."""
    if value is None:
        return PLACEHOLDER
    if isinstance(value, str):
        return value if value != "" else PLACEHOLDER
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    return str(value)


def render_record(record: Record, interactive: bool = False) -> str:
    """Render all 17 fields as ``Title: value`` lines in column order."""
    lines = []
    for attr, title, _ in COLUMN_SPECS:
        label = colorize(f"{title}:", "label", interactive)
        value = colorize(display_value(getattr(record, attr)), "value", interactive)
        lines.append(f"{label} {value}")
    return "\n".join(lines)


class Displayable(Protocol):
    def render_summary(self) -> str: ...


class BasicView:
    """One line: date, company and product."""

    def __init__(self, record: Record, interactive: bool = False) -> None:
        self.record = record
        self.interactive = interactive

    def render_summary(self) -> str:
        r = self.record
        parts = [("Date:", r.date), ("Company:", r.company), ("Product:", r.product)]
        return ", ".join(
            f"{colorize(label, 'label', self.interactive)} {display_value(value)}"
            for label, value in parts
        )


class DetailedView:
    """Throughput and capacity oriented summary."""

    def __init__(self, record: Record, interactive: bool = False) -> None:
        self.record = record
        self.interactive = interactive

    def render_summary(self) -> str:
        r = self.record
        heading = colorize("Detailed Record:", "heading", self.interactive)
        return "\n".join([
            heading,
            f"  Date: {display_value(r.date)}",
            f"  Year: {display_value(r.year)}",
            f"  Company: {display_value(r.company)}",
            f"  Pipeline: {display_value(r.pipeline)}",
            f"  Throughput: {display_value(r.throughput)} (1000 m3/d)",
            f"  Available Capacity: {display_value(r.available_capacity)} (1000 m3/d)",
            f"  Reason for Variance: {display_value(r.reason_for_variance)}",
        ])


class FullView:
    """Every column, see render_record."""

    def __init__(self, record: Record, interactive: bool = False) -> None:
        self.record = record
        self.interactive = interactive

    def render_summary(self) -> str:
        return render_record(self.record, self.interactive)


_VIEWS: dict[str, type[BasicView] | type[DetailedView] | type[FullView]] = {
    "basic": BasicView,
    "detailed": DetailedView,
    "full": FullView,
}


def make_view(record: Record, style: str = "full", interactive: bool = False) -> Displayable:
    """Build the view for ``style`` (one of LIST_STYLES).

    Raises:
        ValueError: Unknown style
    """
    try:
        view_cls = _VIEWS[style]
    except KeyError:
        raise ValueError(f"unknown list style: {style!r} (expected one of {LIST_STYLES})") from None
    return view_cls(record, interactive)

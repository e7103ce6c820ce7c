"""Services: record display, the interactive editor, progress and summary output."""

"""Interactive CSV record editor for pipeline throughput and capacity data."""

__version__ = "0.1.0"

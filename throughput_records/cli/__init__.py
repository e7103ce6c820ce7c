"""Command line entry point (``python -m throughput_records.cli``)."""

"""CSV reading and writing for the throughput dataset."""

from .reader import DatasetLoadError, load_dataset, parse_input_line
from .writer import DatasetWriteError, save_dataset

__all__ = [
    "DatasetLoadError",
    "DatasetWriteError",
    "load_dataset",
    "parse_input_line",
    "save_dataset",
]

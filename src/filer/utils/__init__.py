"""Utility modules for filer."""

from .listing import compile_pattern, discover_files, filter_and_sort, list_filenames
from .logging import get_console, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "get_console",
    "list_filenames",
    "compile_pattern",
    "filter_and_sort",
    "discover_files",
]

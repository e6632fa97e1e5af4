"""Terminal user interface for filer."""

from .app import TriageApp
from .terminal import KeyReader, raw_input_mode
from .view import render

__all__ = [
    "TriageApp",
    "KeyReader",
    "raw_input_mode",
    "render",
]

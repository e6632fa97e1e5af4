"""Storage backends implementing the keep/delete operations."""

from .base import FileOperations
from .local import LocalFileOperations

__all__ = [
    "FileOperations",
    "LocalFileOperations",
]

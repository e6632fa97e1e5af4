"""Command line interface for filer."""

from .main import cli

__all__ = ["cli"]

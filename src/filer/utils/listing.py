"""Source directory discovery and regex filtering of filenames."""

import re
from collections.abc import Iterable
from pathlib import Path

from ..exceptions import PatternError, SourceDirectoryError
from .logging import get_logger

logger = get_logger(__name__)


def list_filenames(source: Path) -> list[str]:
    """
    List the regular files directly inside a directory.

    Directories are skipped; the order is whatever the OS returns.

    Args:
        source: Directory to scan

    Returns:
        List of bare filenames

    Raises:
        SourceDirectoryError: If the directory is missing or unreadable
    """
    source = Path(source)

    if not source.exists():
        raise SourceDirectoryError(f"Source directory does not exist: {source}")

    if not source.is_dir():
        raise SourceDirectoryError(f"Source is not a directory: {source}")

    filenames: list[str] = []
    try:
        for entry in source.iterdir():
            if entry.is_dir():
                continue
            filenames.append(entry.name)
    except PermissionError as e:
        raise SourceDirectoryError(f"Permission denied reading {source}: {e}") from e
    except OSError as e:
        raise SourceDirectoryError(f"Cannot read source directory {source}: {e}") from e

    logger.debug(f"Found {len(filenames)} file(s) in {source}")
    return filenames


def compile_pattern(pattern: str | None) -> re.Pattern | None:
    """
    Compile a filename filter.

    An empty or missing pattern means "no filter".

    Raises:
        PatternError: If the expression does not compile
    """
    if not pattern:
        return None

    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(f"Invalid pattern {pattern!r}: {e}") from e


def filter_and_sort(filenames: Iterable[str], pattern: str | re.Pattern | None = None) -> list[str]:
    """
    Filter filenames by a regular expression and sort them by name.

    A name is kept when the pattern matches anywhere in it, so an anchored
    expression like ``\\.jpg$`` selects by extension.

    Args:
        filenames: Names to filter
        pattern: Expression string, compiled pattern, or None for no filter

    Returns:
        Matching names in lexicographic order
    """
    if isinstance(pattern, str) or pattern is None:
        pattern = compile_pattern(pattern)

    if pattern is None:
        selected = list(filenames)
    else:
        selected = [name for name in filenames if pattern.search(name)]

    selected.sort()
    return selected


def discover_files(source: Path, pattern: str | None = None) -> list[str]:
    """List, filter and sort the files of a source directory in one step."""
    filenames = list_filenames(source)
    selected = filter_and_sort(filenames, pattern)

    if pattern:
        logger.info(f"Pattern {pattern!r} matched {len(selected)} of {len(filenames)} file(s)")

    return selected

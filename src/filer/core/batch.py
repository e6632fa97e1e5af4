"""Forward-only cursor over the fixed list of files under triage."""

from collections.abc import Sequence

from ..exceptions import ValidationError

# Returned by Batch.current() once every file has been handled
COMPLETE = ""


class Batch:
    """
    An ordered, immutable list of filenames with a cursor that only moves forward.

    Positions shown to the user are 1-based: progress() is the number of the
    file currently on screen ("file 2 of 5"), done() is how many files have
    already been handled.
    """

    def __init__(self, files: Sequence[str]):
        if len(files) == 0:
            raise ValidationError("No files to process")

        self._files: tuple[str, ...] = tuple(files)
        self._cursor = 0

    @property
    def cursor(self) -> int:
        """Index of the current file; equals total() once complete."""
        return self._cursor

    @property
    def files(self) -> tuple[str, ...]:
        return self._files

    def current(self) -> str:
        """Current filename, or COMPLETE when the batch is exhausted."""
        if self._cursor >= len(self._files):
            return COMPLETE
        return self._files[self._cursor]

    def advance(self) -> None:
        """Move to the next file. Safe to call after completion."""
        if self._cursor < len(self._files):
            self._cursor += 1

    def is_complete(self) -> bool:
        return self._cursor >= len(self._files)

    def progress(self) -> int:
        """1-based position of the current file, clamped to total()."""
        return min(self._cursor + 1, len(self._files))

    def done(self) -> int:
        """Number of files already handled."""
        return self._cursor

    def total(self) -> int:
        return len(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"Batch(cursor={self._cursor}, total={len(self._files)})"

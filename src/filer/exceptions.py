"""Exception hierarchy for filer."""

from pathlib import Path


class FilerError(Exception):
    """Base exception for filer."""

    pass


class StartupError(FilerError):
    """Raised before the interactive loop starts; the run cannot begin."""

    pass


class SourceDirectoryError(StartupError):
    pass


class TargetDirectoryError(StartupError):
    pass


class PatternError(StartupError):
    pass


class ValidationError(StartupError):
    """Raised when a batch would be built from an empty file list."""

    pass


class OperationError(FilerError):
    """Raised by a keep or delete operation on a single file."""

    pass


class MoveError(OperationError):
    """Base class for SafeMover failures."""

    def __init__(self, message: str, source: Path, destination: Path):
        super().__init__(message)
        self.source = Path(source)
        self.destination = Path(destination)


class SourceNotFoundError(MoveError):
    pass


class CopyOpenFailedError(MoveError):
    pass


class CopyWriteFailedError(MoveError):
    pass


class SizeMismatchError(MoveError):
    pass


class SourceCleanupFailedError(MoveError):
    """The destination holds a full copy but the source could not be removed."""

    pass

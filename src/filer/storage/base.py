"""Abstract file operations used by the triage controller.

The controller only ever asks a backend to keep or delete a file by name, so
any storage that can do those two things can stand in for the local disk.
"""

from abc import ABC, abstractmethod


class FileOperations(ABC):
    """Abstract base class for keep/delete backends.

    Example:
        >>> operations = LocalFileOperations(Path("~/Downloads"), Path("./keep"))
        >>> operations.keep("photo.jpg")
        >>> operations.delete("setup.exe")
    """

    @abstractmethod
    def keep(self, filename: str) -> None:
        """Keep a file, moving it to the backend's destination if it has one.

        Args:
            filename: Bare name of a file in the source location.

        Raises:
            OSError or OperationError: If the file could not be kept.
        """

    @abstractmethod
    def delete(self, filename: str) -> None:
        """Remove a file from the source location.

        Args:
            filename: Bare name of a file in the source location.

        Raises:
            OSError: If the file could not be removed.
        """

"""Safe single-file move: atomic rename with a verified copy fallback."""

import os
import shutil
from pathlib import Path

from ..exceptions import (
    CopyOpenFailedError,
    CopyWriteFailedError,
    SizeMismatchError,
    SourceCleanupFailedError,
    SourceNotFoundError,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)

COPY_CHUNK_SIZE = 1024 * 1024


class SafeMover:
    """
    Moves one file without ever leaving a truncated copy behind.

    A plain rename is tried first. When that is not possible (typically
    because source and destination live on different devices) the file is
    streamed into place, its size is checked, and only then is the source
    removed.
    """

    def __init__(self, chunk_size: int = COPY_CHUNK_SIZE):
        """
        Initialize the mover.

        Args:
            chunk_size: Buffer size used by the copy fallback
        """
        self.chunk_size = chunk_size

    def move(self, source: Path, destination: Path) -> None:
        """
        Move source to destination.

        Args:
            source: Existing file to move
            destination: Full destination path (not a folder)

        Raises:
            SourceNotFoundError: Source does not exist; nothing was written
            CopyOpenFailedError: Fallback could not open source or destination
            CopyWriteFailedError: Fallback copy failed; partial copy removed
            SizeMismatchError: Copied size differs; destination removed
            SourceCleanupFailedError: Copy is complete but source remains
        """
        source = Path(source)
        destination = Path(destination)

        if not source.exists():
            raise SourceNotFoundError(
                f"Source file not found: {source}", source, destination
            )

        try:
            os.rename(source, destination)
            logger.info(f"Moved: {source.name} -> {destination}")
            return
        except OSError as e:
            logger.debug(f"Rename {source} -> {destination} failed ({e}), copying instead")

        self.copy_and_remove(source, destination)

    def copy_and_remove(self, source: Path, destination: Path) -> None:
        """
        Copy source to destination, verify the size, then delete source.

        Raises the same errors as move(), except SourceNotFoundError.
        """
        source = Path(source)
        destination = Path(destination)

        try:
            src = open(source, "rb")
        except OSError as e:
            raise CopyOpenFailedError(
                f"Cannot open {source} for reading: {e}", source, destination
            ) from e

        with src:
            try:
                dst = open(destination, "wb")
            except OSError as e:
                raise CopyOpenFailedError(
                    f"Cannot open {destination} for writing: {e}", source, destination
                ) from e

            try:
                with dst:
                    shutil.copyfileobj(src, dst, self.chunk_size)
            except OSError as e:
                self._discard(destination)
                raise CopyWriteFailedError(
                    f"Copy of {source.name} to {destination} failed: {e}",
                    source,
                    destination,
                ) from e

        source_size = source.stat().st_size
        destination_size = destination.stat().st_size
        if source_size != destination_size:
            self._discard(destination)
            raise SizeMismatchError(
                f"File sizes do not match after copy: {source} is {source_size} bytes, "
                f"{destination} is {destination_size} bytes",
                source,
                destination,
            )

        try:
            source.unlink()
        except OSError as e:
            raise SourceCleanupFailedError(
                f"Copied {source.name} to {destination} but could not remove the source: {e}",
                source,
                destination,
            ) from e

        logger.info(f"Moved (copy): {source.name} -> {destination}")

    @staticmethod
    def _discard(path: Path) -> None:
        """Best-effort removal of a partial or invalid destination."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove incomplete copy {path}: {e}")

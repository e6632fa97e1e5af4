"""Local disk implementation of the keep/delete operations."""

from pathlib import Path

from ..exceptions import TargetDirectoryError
from ..mover import SafeMover
from ..utils.logging import get_logger
from .base import FileOperations

logger = get_logger(__name__)

MAX_CONFLICT_SUFFIX = 1000


class LocalFileOperations(FileOperations):
    """
    Keeps and deletes files in a local source directory.

    Kept files are moved into the target directory with SafeMover. Without a
    target, keeping a file leaves it where it is.
    """

    def __init__(
        self,
        source: Path,
        target: Path | None = None,
        mover: SafeMover | None = None,
    ):
        """
        Initialize local file operations.

        Args:
            source: Directory holding the files under triage
            target: Directory for kept files, created if missing
            mover: Mover used for keep (defaults to a new SafeMover)

        Raises:
            TargetDirectoryError: If the target directory cannot be created
        """
        self.source = Path(source)
        self.target = Path(target) if target is not None else None
        self.mover = mover or SafeMover()

        if self.target is not None and not self.target.is_dir():
            try:
                self.target.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created folder: {self.target}")
            except OSError as e:
                raise TargetDirectoryError(
                    f"Failed to create target directory {self.target}: {e}"
                ) from e

    @property
    def keeps_in_place(self) -> bool:
        """True when keep() leaves files in the source directory."""
        if self.target is None:
            return True
        try:
            return self.target.resolve() == self.source.resolve()
        except OSError:
            return False

    def _resolve_conflict(self, destination: Path) -> Path:
        """
        Resolve naming conflicts by adding (1), (2), etc.

        Args:
            destination: Original destination path

        Returns:
            Conflict-free destination path
        """
        if not destination.exists():
            return destination

        stem = destination.stem
        suffix = destination.suffix
        parent = destination.parent

        for counter in range(1, MAX_CONFLICT_SUFFIX + 1):
            candidate = parent / f"{stem} ({counter}){suffix}"
            if not candidate.exists():
                return candidate

        raise FileExistsError(f"Too many conflicts for {destination}")

    def keep(self, filename: str) -> None:
        if self.keeps_in_place:
            logger.info(f"Kept in place: {filename}")
            return

        source_path = self.source / filename
        destination = self._resolve_conflict(self.target / filename)
        if destination.name != filename:
            logger.info(f"{filename} already exists in {self.target}, keeping as {destination.name}")

        self.mover.move(source_path, destination)

    def delete(self, filename: str) -> None:
        path = self.source / filename
        path.unlink()
        logger.info(f"Deleted: {path}")

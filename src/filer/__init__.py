"""
filer - Interactive file sorting in the terminal.

Walks through the files of a directory one at a time and lets you keep,
delete or skip each of them with a single key press.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import ConfigManager, FilerConfig
from .core import Batch, Controller, Phase
from .mover import SafeMover
from .storage import FileOperations, LocalFileOperations
from .utils.logging import get_logger

__all__ = [
    "__version__",
    "get_logger",
    # Config
    "FilerConfig",
    "ConfigManager",
    # Core
    "Batch",
    "Controller",
    "Phase",
    # File operations
    "FileOperations",
    "LocalFileOperations",
    "SafeMover",
]

"""Interactive triage state machine.

The controller receives one event at a time (a key press or the outcome of a
keep/delete operation) and answers with at most one command for the runtime:
quit, or run a pending file operation in the background. It never touches the
terminal or the filesystem itself.
"""

from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import FilerError
from ..storage import FileOperations
from ..utils.logging import get_logger
from .batch import Batch

logger = get_logger(__name__)

CTRL_C = "\x03"


class Phase(str, Enum):
    """Controller phases."""

    FILE_MANAGE = "file_manage"
    PROCESSING = "processing"
    END = "end"
    ERROR = "error"


class Action(str, Enum):
    """File operations the user can dispatch."""

    KEEP = "keep"
    DELETE = "delete"


class Key(str, Enum):
    """Recognised keys while a file is on screen."""

    KEEP = "k"
    DELETE = "d"
    SKIP = "s"
    QUIT = "q"


@dataclass(frozen=True)
class KeyPressed:
    """A single key read from the terminal."""

    key: str

    @property
    def is_quit(self) -> bool:
        return self.key == CTRL_C or self.key.lower() == Key.QUIT.value


@dataclass(frozen=True)
class OperationSucceeded:
    action: Action
    filename: str


@dataclass(frozen=True)
class OperationFailed:
    action: Action
    filename: str
    message: str


Event = KeyPressed | OperationSucceeded | OperationFailed


class Quit:
    """Command telling the runtime to stop the event loop."""

    def __repr__(self) -> str:
        return "QUIT"


QUIT = Quit()


@dataclass(frozen=True)
class PendingOperation:
    """
    A keep or delete dispatched by the controller.

    execute() runs the operation and turns its outcome into exactly one
    event, which the runtime feeds back into Controller.handle().
    """

    action: Action
    filename: str
    operations: FileOperations = field(repr=False, compare=False)

    def execute(self) -> OperationSucceeded | OperationFailed:
        try:
            if self.action is Action.KEEP:
                self.operations.keep(self.filename)
            else:
                self.operations.delete(self.filename)
        except (OSError, FilerError) as e:
            message = str(e) or type(e).__name__
            logger.error(f"Failed to {self.action.value} {self.filename}: {message}")
            return OperationFailed(self.action, self.filename, message)

        return OperationSucceeded(self.action, self.filename)


Command = Quit | PendingOperation


@dataclass
class Tally:
    """Per-run counts shown in the summary."""

    kept: int = 0
    deleted: int = 0
    skipped: int = 0

    def record(self, action: Action) -> None:
        if action is Action.KEEP:
            self.kept += 1
        else:
            self.deleted += 1


class Controller:
    """
    Drives a triage run over a Batch.

    Phases: FILE_MANAGE (waiting for k/d/s/q), PROCESSING (an operation is
    in flight), END (batch exhausted) and ERROR (an operation failed). END
    and ERROR terminate on any key.
    """

    def __init__(self, batch: Batch, operations: FileOperations):
        """
        Initialize the controller.

        Args:
            batch: Files to triage, already filtered and sorted
            operations: Backend used for keep and delete
        """
        self.batch = batch
        self.operations = operations

        self.phase = Phase.FILE_MANAGE
        self.error_message: str | None = None
        self.terminated = False
        self.tally = Tally()

    @property
    def exit_code(self) -> int:
        """0 for a normal quit or completion, 1 if the run ended on an error."""
        return 1 if self.phase is Phase.ERROR else 0

    def handle(self, event: Event) -> Command | None:
        """
        Apply one event and return the command the runtime should run.

        Events that arrive after the run terminated are ignored.
        """
        if self.terminated:
            logger.debug(f"Ignoring {event!r} after termination")
            return None

        if self.phase is Phase.FILE_MANAGE:
            command = self._handle_file_manage(event)
        elif self.phase is Phase.PROCESSING:
            command = self._handle_processing(event)
        else:
            command = self._handle_terminal(event)

        if command is QUIT:
            self.terminated = True
        return command

    def _handle_file_manage(self, event: Event) -> Command | None:
        if not isinstance(event, KeyPressed):
            return None

        if event.is_quit:
            logger.info(f"Quit at {self.batch.progress()}/{self.batch.total()}")
            return QUIT

        key = event.key.lower()
        if key == Key.KEEP.value:
            return self._dispatch(Action.KEEP)
        if key == Key.DELETE.value:
            return self._dispatch(Action.DELETE)
        if key == Key.SKIP.value:
            logger.info(f"Skipped: {self.batch.current()}")
            self.tally.skipped += 1
            self._advance()

        return None

    def _dispatch(self, action: Action) -> PendingOperation:
        self.phase = Phase.PROCESSING
        return PendingOperation(action, self.batch.current(), self.operations)

    def _handle_processing(self, event: Event) -> Command | None:
        if isinstance(event, KeyPressed):
            if event.is_quit:
                logger.info(f"Quit while processing {self.batch.current()}")
                return QUIT
            return None

        if isinstance(event, OperationFailed):
            self.error_message = event.message or f"Failed to {event.action.value} {event.filename}"
            self.phase = Phase.ERROR
        elif isinstance(event, OperationSucceeded):
            self.tally.record(event.action)
            self._advance()

        return None

    def _handle_terminal(self, event: Event) -> Command | None:
        if isinstance(event, KeyPressed):
            return QUIT
        return None

    def _advance(self) -> None:
        self.batch.advance()
        if self.batch.is_complete():
            self.phase = Phase.END
            logger.info(f"Batch complete: {self.batch.total()} file(s)")
        else:
            self.phase = Phase.FILE_MANAGE

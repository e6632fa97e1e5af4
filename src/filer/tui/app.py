"""Event loop tying the controller to the terminal."""

import queue
import threading
from typing import IO

from rich.console import Console
from rich.live import Live

from ..core.controller import (
    CTRL_C,
    QUIT,
    Controller,
    KeyPressed,
    PendingOperation,
)
from ..utils.logging import get_logger
from .terminal import KeyReader, raw_input_mode
from .view import render

logger = get_logger(__name__)


class TriageApp:
    """
    Runs a controller against the terminal.

    Key presses and operation outcomes share one queue and are handled one
    at a time on the calling thread. Each keep/delete runs on its own worker
    thread and posts exactly one outcome event back to the queue.
    """

    def __init__(
        self,
        controller: Controller,
        console: Console | None = None,
        input_stream: IO | None = None,
    ):
        """
        Initialize the app.

        Args:
            controller: Controller holding the batch and file operations
            console: Rich console to draw on
            input_stream: Stream keys are read from (defaults to stdin)
        """
        self.controller = controller
        self.console = console or Console()
        self.input_stream = input_stream
        self.events: queue.Queue = queue.Queue()
        self._workers: list[threading.Thread] = []

    def _start_operation(self, operation: PendingOperation):
        def work():
            self.events.put(operation.execute())

        # Not a daemon: an operation still running when the user quits is
        # allowed to finish before the interpreter exits.
        worker = threading.Thread(
            target=work, name=f"filer-{operation.action.value}", daemon=False
        )
        self._workers.append(worker)
        worker.start()
        logger.debug(f"Dispatched {operation.action.value} for {operation.filename}")

    def step(self, event) -> bool:
        """
        Handle one event and run the resulting command.

        Returns:
            False once the run has terminated
        """
        command = self.controller.handle(event)

        if command is QUIT:
            return False
        if isinstance(command, PendingOperation):
            self._start_operation(command)
        return True

    def wait_for_operations(self, timeout: float | None = None):
        """Block until every dispatched operation has finished."""
        for worker in self._workers:
            worker.join(timeout)

    def run(self) -> int:
        """
        Run until the user quits or acknowledges the end or error screen.

        Returns:
            Process exit code (0 for quit or completion, 1 after an error)
        """
        with raw_input_mode(self.input_stream):
            reader = KeyReader(self.events, self.input_stream)
            reader.start()
            try:
                with Live(
                    render(self.controller),
                    console=self.console,
                    auto_refresh=False,
                    transient=False,
                ) as live:
                    running = True
                    while running:
                        event = self.events.get()
                        running = self.step(event)
                        live.update(render(self.controller), refresh=True)
            except KeyboardInterrupt:
                self.controller.handle(KeyPressed(CTRL_C))
            finally:
                reader.stop()

        return self.controller.exit_code

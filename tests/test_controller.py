"""Tests for the triage controller state machine."""

import pytest

from filer.core import (
    QUIT,
    Action,
    Batch,
    Controller,
    KeyPressed,
    OperationFailed,
    OperationSucceeded,
    PendingOperation,
    Phase,
)
from filer.exceptions import SizeMismatchError
from filer.storage import FileOperations


class RecordingOperations(FileOperations):
    """Test double that records calls and can be told to fail."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[tuple[str, str]] = []
        self.error = error

    def keep(self, filename: str) -> None:
        self.calls.append(("keep", filename))
        if self.error:
            raise self.error

    def delete(self, filename: str) -> None:
        self.calls.append(("delete", filename))
        if self.error:
            raise self.error


@pytest.fixture
def operations():
    return RecordingOperations()


@pytest.fixture
def controller(operations):
    return Controller(Batch(["a.txt", "b.txt"]), operations)


def press(controller, key):
    return controller.handle(KeyPressed(key))


class TestFileManagePhase:
    """Tests for key handling while a file is on screen."""

    def test_initial_phase(self, controller):
        assert controller.phase is Phase.FILE_MANAGE
        assert controller.error_message is None
        assert not controller.terminated

    def test_keep_dispatches_operation(self, controller, operations):
        """Test that k moves to processing and returns a keep for the current file."""
        command = press(controller, "k")

        assert controller.phase is Phase.PROCESSING
        assert isinstance(command, PendingOperation)
        assert command.action is Action.KEEP
        assert command.filename == "a.txt"
        # Nothing runs until the runtime executes the command
        assert operations.calls == []

    def test_delete_dispatches_operation(self, controller):
        command = press(controller, "d")

        assert controller.phase is Phase.PROCESSING
        assert command.action is Action.DELETE
        assert command.filename == "a.txt"

    def test_keys_are_case_insensitive(self, controller):
        command = press(controller, "K")

        assert command.action is Action.KEEP

    def test_skip_advances_without_side_effects(self, controller, operations):
        command = press(controller, "s")

        assert command is None
        assert controller.phase is Phase.FILE_MANAGE
        assert controller.batch.current() == "b.txt"
        assert controller.tally.skipped == 1
        assert operations.calls == []

    def test_skip_last_file_ends_run(self, controller):
        press(controller, "s")
        press(controller, "s")

        assert controller.phase is Phase.END
        assert controller.batch.is_complete()

    def test_unknown_key_ignored(self, controller):
        command = press(controller, "x")

        assert command is None
        assert controller.phase is Phase.FILE_MANAGE
        assert controller.batch.cursor == 0

    def test_stray_outcome_ignored(self, controller):
        """Test that an outcome event without a pending operation changes nothing."""
        command = controller.handle(OperationSucceeded(Action.KEEP, "a.txt"))

        assert command is None
        assert controller.phase is Phase.FILE_MANAGE
        assert controller.batch.cursor == 0


class TestKeepFlow:
    """Tests for the full keep flow."""

    def test_keep_both_files(self, controller, operations):
        """Test k, success, k, success ends the run."""
        command = press(controller, "k")
        controller.handle(command.execute())

        assert operations.calls == [("keep", "a.txt")]
        assert controller.phase is Phase.FILE_MANAGE
        assert controller.batch.current() == "b.txt"

        command = press(controller, "k")
        controller.handle(command.execute())

        assert operations.calls == [("keep", "a.txt"), ("keep", "b.txt")]
        assert controller.phase is Phase.END
        assert controller.tally.kept == 2
        assert controller.exit_code == 0

    def test_simulated_success(self, controller):
        press(controller, "k")

        controller.handle(OperationSucceeded(Action.KEEP, "a.txt"))

        assert controller.phase is Phase.FILE_MANAGE
        assert controller.batch.current() == "b.txt"

    def test_keys_ignored_while_processing(self, controller):
        """Test that only quit is honoured while an operation is in flight."""
        press(controller, "k")

        for key in "kds":
            assert press(controller, key) is None

        assert controller.phase is Phase.PROCESSING
        assert controller.batch.cursor == 0


class TestErrorFlow:
    """Tests for failed operations."""

    def test_delete_failure(self, controller):
        """Test that a failure records the message and does not advance."""
        press(controller, "d")

        controller.handle(OperationFailed(Action.DELETE, "a.txt", "permission denied"))

        assert controller.phase is Phase.ERROR
        assert controller.error_message == "permission denied"
        assert controller.batch.current() == "a.txt"
        assert controller.exit_code == 1

    def test_execute_turns_exception_into_event(self):
        operations = RecordingOperations(error=PermissionError("permission denied"))
        controller = Controller(Batch(["a.txt", "b.txt"]), operations)

        command = press(controller, "d")
        event = command.execute()

        assert isinstance(event, OperationFailed)
        assert event.message == "permission denied"

        controller.handle(event)
        assert controller.phase is Phase.ERROR
        assert controller.error_message == "permission denied"

    def test_move_error_message(self, tmp_path):
        error = SizeMismatchError("File sizes do not match", tmp_path / "a", tmp_path / "b")
        controller = Controller(Batch(["a.txt"]), RecordingOperations(error=error))

        controller.handle(press(controller, "k").execute())

        assert controller.error_message == "File sizes do not match"

    def test_empty_error_message_replaced(self):
        """Test that the error phase always carries a message."""
        controller = Controller(Batch(["a.txt"]), RecordingOperations(error=OSError()))

        controller.handle(press(controller, "d").execute())

        assert controller.phase is Phase.ERROR
        assert controller.error_message == "OSError"

    def test_failure_event_without_message(self, controller):
        """Test that an outcome event with an empty message still shows a reason."""
        press(controller, "d")

        controller.handle(OperationFailed(Action.DELETE, "a.txt", ""))

        assert controller.phase is Phase.ERROR
        assert controller.error_message == "Failed to delete a.txt"

    def test_any_key_exits_error(self, controller):
        press(controller, "d")
        controller.handle(OperationFailed(Action.DELETE, "a.txt", "boom"))

        assert press(controller, "x") is QUIT
        assert controller.terminated
        assert controller.exit_code == 1


class TestQuit:
    """Tests for quitting from every phase."""

    @pytest.mark.parametrize("key", ["q", "Q", "\x03"])
    def test_quit_from_file_manage(self, controller, key):
        assert press(controller, key) is QUIT
        assert controller.terminated
        assert controller.batch.cursor == 0
        assert controller.exit_code == 0

    @pytest.mark.parametrize("key", ["q", "\x03"])
    def test_quit_while_processing(self, controller, key):
        press(controller, "k")

        assert press(controller, key) is QUIT
        assert controller.batch.cursor == 0

    def test_late_outcome_after_quit_ignored(self, controller):
        """Test that an operation finishing after quit does not change state."""
        press(controller, "k")
        press(controller, "q")

        command = controller.handle(OperationSucceeded(Action.KEEP, "a.txt"))

        assert command is None
        assert controller.phase is Phase.PROCESSING
        assert controller.batch.cursor == 0

    def test_any_key_exits_end(self, controller):
        press(controller, "s")
        press(controller, "s")

        assert press(controller, "z") is QUIT
        assert controller.batch.cursor == 2
        assert controller.exit_code == 0

    def test_events_after_termination_ignored(self, controller):
        press(controller, "q")

        assert press(controller, "s") is None
        assert controller.batch.cursor == 0

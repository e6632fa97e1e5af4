"""Core triage components: the file batch and the controller state machine."""

from .batch import COMPLETE, Batch
from .controller import (
    QUIT,
    Action,
    Controller,
    KeyPressed,
    OperationFailed,
    OperationSucceeded,
    PendingOperation,
    Phase,
    Tally,
)

__all__ = [
    "Batch",
    "COMPLETE",
    "Controller",
    "Phase",
    "Action",
    "KeyPressed",
    "OperationSucceeded",
    "OperationFailed",
    "PendingOperation",
    "QUIT",
    "Tally",
]

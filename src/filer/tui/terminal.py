"""Terminal input: unbuffered key mode and a background key reader."""

import os
import queue
import select
import sys
import threading
from contextlib import contextmanager
from typing import IO, Iterator

try:
    import termios
    import tty

    _HAS_TERMIOS = True
except ImportError:
    _HAS_TERMIOS = False

from ..core.controller import KeyPressed
from ..utils.logging import get_logger

logger = get_logger(__name__)

ESC = "\x1b"

# Seconds to wait for the rest of an escape sequence before treating ESC as a key
ESCAPE_TIMEOUT = 0.05


def _fileno(stream: IO) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


@contextmanager
def raw_input_mode(stream: IO | None = None) -> Iterator[bool]:
    """
    Read keys one at a time, without echo, for the duration of the block.

    The previous terminal attributes are restored on every exit path. When
    the stream is not a terminal (pipes, tests) nothing is changed.

    Yields:
        True if the terminal mode was changed
    """
    stream = stream if stream is not None else sys.stdin
    fd = _fileno(stream)

    if not _HAS_TERMIOS or fd is None or not os.isatty(fd):
        yield False
        return

    old_settings = termios.tcgetattr(fd)
    try:
        # cbreak keeps output processing, so rich can still draw lines
        tty.setcbreak(fd)
        yield True
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
        logger.debug("Terminal mode restored")


class KeyReader:
    """
    Reads single characters from a stream on a daemon thread.

    Each character is posted as a KeyPressed event on the shared event
    queue. End of input is reported as a quit key so the run cannot hang.
    """

    def __init__(self, events: queue.Queue, stream: IO | None = None):
        self.events = events
        self.stream = stream if stream is not None else sys.stdin
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def _read_char(self) -> str | None:
        """Read one character; "" at end of input, None for an undecodable byte."""
        fd = _fileno(self.stream)
        if fd is not None and os.isatty(fd):
            data = os.read(fd, 1)
            if not data:
                return ""
            return data.decode(errors="ignore") or None
        return self.stream.read(1)

    def _has_pending_input(self) -> bool:
        fd = _fileno(self.stream)
        if fd is None or not os.isatty(fd):
            return True
        ready, _, _ = select.select([fd], [], [], ESCAPE_TIMEOUT)
        return bool(ready)

    def _read_escape_sequence(self) -> str:
        """
        Read the rest of a sequence that started with ESC.

        Arrow and function keys arrive as CSI (ESC [ ... final) or SS3
        (ESC O final) sequences; the whole sequence becomes one key so that
        its last byte is never mistaken for a letter key.
        """
        sequence = ESC
        if not self._has_pending_input():
            return sequence

        char = self._read_char()
        if not char:
            return sequence
        sequence += char

        if char == "[":
            while True:
                char = self._read_char()
                if not char:
                    return sequence
                sequence += char
                if "\x40" <= char <= "\x7e":
                    return sequence
        elif char == "O":
            char = self._read_char()
            if char:
                sequence += char

        return sequence

    def _run(self):
        while not self._stop.is_set():
            try:
                char = self._read_char()
            except (OSError, ValueError) as e:
                logger.debug(f"Key reader stopped: {e}")
                char = ""

            if char is None:
                continue
            if not char:
                self.events.put(KeyPressed("q"))
                return

            if char == ESC:
                try:
                    char = self._read_escape_sequence()
                except (OSError, ValueError) as e:
                    logger.debug(f"Key reader stopped: {e}")
                    char = ESC

            self.events.put(KeyPressed(char))

    def start(self):
        """Start reading keys in the background."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="filer-keys", daemon=True)
        self._thread.start()

    def stop(self):
        """Stop posting keys. A read already blocked in the OS is abandoned."""
        self._stop.set()

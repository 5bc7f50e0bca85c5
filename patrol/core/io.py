"""
Line-oriented I/O capabilities consumed by the simulation.

The engine only ever asks for a line of text or hands over a line of text.
Two implementations are provided:
- ConsoleIO: interactive play on stdin/stdout
- ScriptedIO: queued responses and captured output, for replays and tests
"""

from __future__ import annotations

import math
import sys
from collections import deque
from typing import Iterable, List, Optional, Protocol, TextIO

from .errors import TransportError


class InputReader(Protocol):
    def read_line(self, prompt: str) -> str:
        ...


class OutputWriter(Protocol):
    def writeln(self, message: str = "") -> None:
        ...


class ConsoleIO:
    """Reads from and writes to the process console."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def read_line(self, prompt: str) -> str:
        try:
            if prompt:
                self._stdout.write(f"{prompt} ")
                self._stdout.flush()
            line = self._stdin.readline()
        except OSError as exc:
            raise TransportError(f"console read failed: {exc}") from exc
        if line == "":
            raise TransportError("console input closed")
        return line.rstrip("\n")

    def writeln(self, message: str = "") -> None:
        try:
            self._stdout.write(f"{message}\n")
        except OSError as exc:
            raise TransportError(f"console write failed: {exc}") from exc


class ScriptedIO:
    """
    In-memory I/O driven by a fixed list of responses.

    Prompts and written lines are both captured in ``lines`` so that a
    transcript reads the same way the console session would.

    Attributes:
        lines: Everything written so far, prompts included
    """

    def __init__(self, responses: Iterable[str] = ()):
        self._responses: deque[str] = deque(responses)
        self.lines: List[str] = []

    def feed(self, *responses: str) -> None:
        """Queue more responses."""
        self._responses.extend(responses)

    @property
    def pending(self) -> int:
        """Number of queued responses not yet consumed."""
        return len(self._responses)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)

    def read_line(self, prompt: str) -> str:
        if prompt:
            self.lines.append(prompt)
        if not self._responses:
            raise TransportError("scripted input exhausted")
        return self._responses.popleft()

    def writeln(self, message: str = "") -> None:
        self.lines.append(message)


def read_number(reader: InputReader, prompt: str) -> float | None:
    """
    Prompt for a number.

    Returns:
        The parsed value, or None when the line is not a finite number
    """
    text = reader.read_line(prompt).strip()
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value

"""Pluggable output and input capabilities for CoreContext.

A context without an output handler writes straight to standard output, and
one without an input provider reads straight from standard input. Injecting
the implementations below captures output and scripts input, mostly for
tests.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional


class OutputHandler(ABC):
    """Destination for text that would otherwise be printed to stdout.

    Implementations must serialize deliveries so that concurrent callers
    never interleave partial writes.
    """

    @abstractmethod
    async def handle_output_line(self, line: str) -> None:
        """Receive one unit of output, terminator included."""
        pass


class InputProvider(ABC):
    """Source of lines that would otherwise be read from stdin."""

    @abstractmethod
    async def read_line(self) -> Optional[str]:
        """Return the next line, or None when no more input is available."""
        pass


class CapturingOutputHandler(OutputHandler):
    """Record every unit of output in delivery order."""

    def __init__(self):
        self.lines: List[str] = []
        self._lock = asyncio.Lock()

    async def handle_output_line(self, line: str) -> None:
        async with self._lock:
            self.lines.append(line)

    @property
    def text(self) -> str:
        """All captured output joined together."""
        return "".join(self.lines)

    def clear(self):
        self.lines.clear()


class ScriptedInputProvider(InputProvider):
    """Answer reads from a fixed list of lines, then signal end of input."""

    def __init__(self, lines: Iterable[str] = ()):
        self._pending = list(lines)
        self._lock = asyncio.Lock()
        self.reads = 0

    async def read_line(self) -> Optional[str]:
        async with self._lock:
            self.reads += 1
            if not self._pending:
                return None
            return self._pending.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._pending)

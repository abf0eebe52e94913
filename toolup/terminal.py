"""Terminal width detection and text wrapping."""

import logging
import re
import struct
import sys
from abc import ABC, abstractmethod
from typing import List, Optional

from rich.cells import cell_len

logger = logging.getLogger(__name__)

DEFAULT_TERMINAL_WIDTH = 80

# TIOCGWINSZ is a complex macro on OpenBSD, so the flattened value is used.
OPENBSD_TIOCGWINSZ = 0x40087468


class TerminalWidthProbe(ABC):
    """Abstract source of the active terminal column count."""

    @abstractmethod
    def get_width(self) -> int:
        """Return a positive column count."""
        pass


class DefaultWidthProbe(TerminalWidthProbe):
    """Fixed width for platforms without terminal size detection."""

    def __init__(self, width: int = DEFAULT_TERMINAL_WIDTH):
        if width <= 0:
            raise ValueError(f"Terminal width must be positive, got {width}")
        self.width = width

    def get_width(self) -> int:
        return self.width


class IoctlWidthProbe(TerminalWidthProbe):
    """Query the window size of standard output with the TIOCGWINSZ ioctl.

    Any failure (no controlling terminal, closed stream, zero columns) falls
    back to ``DEFAULT_TERMINAL_WIDTH``. The size is read again on every call
    because the terminal may be resized between calls.
    """

    def __init__(self, request: Optional[int] = None, stream=None):
        self.request = request
        self.stream = stream

    def get_width(self) -> int:
        columns = self._query_columns()
        if columns > 0:
            return columns
        logger.debug(
            "Terminal width detection failed, using default of %d columns",
            DEFAULT_TERMINAL_WIDTH,
        )
        return DEFAULT_TERMINAL_WIDTH

    def _query_columns(self) -> int:
        try:
            import fcntl
            import termios
        except ImportError:
            return 0

        request = self.request if self.request is not None else termios.TIOCGWINSZ
        stream = self.stream if self.stream is not None else sys.stdout

        try:
            fd = stream.fileno()
            packed = fcntl.ioctl(fd, request, struct.pack("HHHH", 0, 0, 0, 0))
        except (OSError, ValueError, AttributeError):
            return 0

        _, columns, _, _ = struct.unpack("HHHH", packed)
        return columns


def default_width_probe() -> TerminalWidthProbe:
    """Pick the width source for the running platform."""
    if sys.platform.startswith("openbsd"):
        return IoctlWidthProbe(request=OPENBSD_TIOCGWINSZ)
    if sys.platform == "darwin" or sys.platform.startswith("linux"):
        return IoctlWidthProbe()
    return DefaultWidthProbe()


def get_terminal_width() -> int:
    """Detect the terminal width in columns."""
    return default_width_probe().get_width()


_CHUNK_PATTERN = re.compile(r"\s+|\S+")


def _split_to_width(word: str, width: int) -> List[str]:
    pieces = []
    current = ""
    for char in word:
        if current and cell_len(current + char) > width:
            pieces.append(current)
            current = ""
        current += char
    pieces.append(current)
    return pieces


def _wrap_line(line: str, width: int) -> List[str]:
    lines: List[str] = []
    current = ""

    for chunk in _CHUNK_PATTERN.findall(line):
        if chunk.isspace():
            # Whitespace at a break is replaced by the line break itself.
            if (current or not lines) and cell_len(current + chunk) <= width:
                current += chunk
            elif current:
                lines.append(current.rstrip())
                current = ""
            continue

        if cell_len(current + chunk) <= width:
            current += chunk
            continue

        if current.strip():
            lines.append(current.rstrip())
        current = ""

        if cell_len(chunk) > width:
            pieces = _split_to_width(chunk, width)
            lines.extend(pieces[:-1])
            current = pieces[-1]
        else:
            current = chunk

    if current or not lines:
        lines.append(current)
    return lines


def wrap_text(text: str, width: int) -> str:
    """Reflow text so that no line is wider than ``width`` terminal cells.

    Lines are broken at whitespace where possible; words longer than the
    width are split. Width is measured in display cells, so wide (e.g. CJK)
    characters count double. Existing line breaks are preserved and lines
    that already fit are left untouched.
    """
    if width <= 0:
        raise ValueError(f"Wrap width must be positive, got {width}")
    if not text:
        return text

    wrapped_lines = []
    for line in text.split("\n"):
        if cell_len(line) <= width:
            wrapped_lines.append(line)
        else:
            wrapped_lines.extend(_wrap_line(line, width))

    return "\n".join(wrapped_lines)

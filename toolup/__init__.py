"""toolup - the I/O core of a toolchain manager.

Every command routes its output, prompts and environment overrides through
a single ``CoreContext``, which wraps text to the terminal width and can be
given capture handlers and scripted input for tests.
"""

from .arch import Architecture, cpu_arch
from .context import CoreContext
from .io import (
    CapturingOutputHandler,
    InputProvider,
    OutputHandler,
    ScriptedInputProvider,
)
from .terminal import get_terminal_width, wrap_text
from .version import VERSION, Version

__version__ = str(VERSION)

__all__ = [
    "CoreContext",
    "OutputHandler",
    "InputProvider",
    "CapturingOutputHandler",
    "ScriptedInputProvider",
    "Architecture",
    "cpu_arch",
    "Version",
    "VERSION",
    "get_terminal_width",
    "wrap_text",
]

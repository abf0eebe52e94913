"""CPU architecture tag sent along with downstream requests."""

import platform
from enum import Enum
from functools import lru_cache
from typing import Optional


class Architecture(str, Enum):
    """Supported processor architectures."""

    X86_64 = "x86_64"
    AARCH64 = "aarch64"


class UnsupportedArchitectureError(Exception):
    """Raised when running on a processor family toolup does not support."""

    pass


_MACHINE_ALIASES = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "x64": Architecture.X86_64,
    "aarch64": Architecture.AARCH64,
    "arm64": Architecture.AARCH64,
}


def detect_architecture(machine: Optional[str] = None) -> Architecture:
    """Map a machine name (default: ``platform.machine()``) to an Architecture."""
    if machine is None:
        machine = platform.machine()

    try:
        return _MACHINE_ALIASES[machine.lower()]
    except KeyError:
        raise UnsupportedArchitectureError(
            f"Unsupported processor architecture: {machine or 'unknown'}"
        ) from None


@lru_cache(maxsize=None)
def cpu_arch() -> Architecture:
    """Architecture of the running process, detected once."""
    return detect_architecture()

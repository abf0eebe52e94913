"""Semantic version used to identify this build."""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple

_VERSION_PATTERN = re.compile(
    r"^v?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?:-(?P<suffix>[0-9A-Za-z.-]+))?$"
)


@total_ordering
@dataclass(frozen=True)
class Version:
    """A major.minor.patch version with an optional pre-release suffix."""

    major: int
    minor: int
    patch: int
    suffix: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse ``1.2.3`` or ``1.2.3-suffix``, with an optional leading ``v``."""
        match = _VERSION_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"Invalid version: {text!r}")

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            suffix=match.group("suffix"),
        )

    def _sort_key(self) -> Tuple[int, int, int, bool, str]:
        # A pre-release sorts before the release it precedes.
        return (self.major, self.minor, self.patch, self.suffix is None, self.suffix or "")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.suffix:
            return f"{base}-{self.suffix}"
        return base


VERSION = Version(major=1, minor=1, patch=0, suffix="dev")

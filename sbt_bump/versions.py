"""Version parsing and ordering.

Versions found in build files are either semantic versions (``1.2.3``,
``2.0-RC4``, ``1.5.5-M1``) or anything else, which is kept verbatim as an
``OtherVersion``. Parsing never fails.

Ordering rules:
- every ``SemVer`` sorts below every ``OtherVersion``
- ``SemVer`` compares (major, minor, patch), then a release is greater
  than any of its pre-releases
- pre-releases order ``RC`` > ``M`` > anything else, numerically within
  ``RC``/``M`` and lexicographically otherwise
"""

from __future__ import annotations

import re
from abc import abstractmethod
from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

_TIERED_PRE_RELEASE = re.compile(r"(RC|M)(\d+)")
_NUMERIC_CORE = re.compile(r"\d+(?:\.\d+){1,2}", re.ASCII)


class PreReleaseKind(IntEnum):
    """Pre-release families, valued in ascending precedence."""

    OTHER = 0
    MILESTONE = 1
    RELEASE_CANDIDATE = 2


class PreRelease(BaseModel):
    """The part of a version after the first ``-``."""

    model_config = ConfigDict(frozen=True)

    kind: PreReleaseKind
    number: int = 0
    label: str = ""

    @classmethod
    def parse(cls, text: str) -> PreRelease:
        """Map ``RC<n>`` and ``M<n>`` to their tiers; keep anything else as a label."""
        match = _TIERED_PRE_RELEASE.fullmatch(text)
        if match is None:
            return cls(kind=PreReleaseKind.OTHER, label=text)
        prefix, digits = match.groups()
        kind = (
            PreReleaseKind.RELEASE_CANDIDATE
            if prefix == "RC"
            else PreReleaseKind.MILESTONE
        )
        return cls(kind=kind, number=int(digits))

    def sort_key(self) -> tuple[int, int, str]:
        return (int(self.kind), self.number, self.label)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, PreRelease):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, PreRelease):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, PreRelease):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, PreRelease):
            return NotImplemented
        return self.sort_key() >= other.sort_key()

    def __str__(self) -> str:
        if self.kind is PreReleaseKind.RELEASE_CANDIDATE:
            return f"RC{self.number}"
        if self.kind is PreReleaseKind.MILESTONE:
            return f"M{self.number}"
        return self.label


class Version(BaseModel):
    """Common base for ``SemVer`` and ``OtherVersion``; use ``parse_version``.

    Equality and hashing follow ``sort_key``, so ``2.0-RC4`` and
    ``2.0.0-RC4`` are the same version even though they print differently.
    """

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def sort_key(self) -> tuple: ...

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    @property
    def is_semver(self) -> bool:
        return isinstance(self, SemVer)

    @property
    def is_pre_release(self) -> bool:
        return False

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.sort_key() >= other.sort_key()


class SemVer(Version):
    """A numeric version with an optional pre-release.

    Attributes:
        text: The version as written, if it was parsed. Used for display
              and rewriting so that ``2.0-RC4`` stays ``2.0-RC4``.
    """

    major: int
    minor: int
    patch: int
    pre_release: PreRelease | None = None
    text: str | None = None

    @property
    def is_pre_release(self) -> bool:
        return self.pre_release is not None

    def sort_key(self) -> tuple:
        # A missing pre-release sorts above any present one.
        pre = self.pre_release.sort_key() if self.pre_release is not None else ()
        return (0, self.major, self.minor, self.patch, self.pre_release is None, pre)

    def __str__(self) -> str:
        if self.text is not None:
            return self.text
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release is None:
            return core
        return f"{core}-{self.pre_release}"


class OtherVersion(Version):
    """A version string that is not a semantic version, kept as written."""

    raw: str

    def sort_key(self) -> tuple:
        return (1, self.raw)

    def __str__(self) -> str:
        return self.raw


ZERO = SemVer(major=0, minor=0, patch=0)


def parse_version(text: str) -> Version:
    """Parse a version string, falling back to ``OtherVersion``.

    Accepts two or three numeric components, optionally followed by
    ``-<pre-release>``. A missing patch is read as 0 and the original text
    is kept for display:
    - "1.2.3" → 1.2.3
    - "2.0-RC4" → 2.0.0-RC4, shown as "2.0-RC4"
    - "2024.01.15" → 2024.1.15
    - "4.5.5.5" → OtherVersion("4.5.5.5")
    - "1.0.0+build" → OtherVersion("1.0.0+build")
    """
    core, sep, suffix = text.partition("-")
    if _NUMERIC_CORE.fullmatch(core) is None:
        return OtherVersion(raw=text)

    parts = [int(part) for part in core.split(".")]
    major, minor = parts[0], parts[1]
    patch = parts[2] if len(parts) == 3 else 0
    return SemVer(
        major=major,
        minor=minor,
        patch=patch,
        pre_release=PreRelease.parse(suffix) if sep else None,
        text=text,
    )

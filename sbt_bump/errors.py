"""Exception types raised by sbt-bump."""

from __future__ import annotations

from pathlib import Path


class SbtBumpError(RuntimeError):
    """Base class for errors the CLI reports without a traceback."""


class SourceFileError(SbtBumpError):
    """A build file could not be read, decoded or written.

    Attributes:
        path: The file being processed.
        operation: What was being done to it ("read", "decode", "write").
    """

    def __init__(self, path: Path, operation: str, reason: str) -> None:
        self.path = path
        self.operation = operation
        super().__init__(f"Failed to {operation} {path}: {reason}")


class ConfigError(SbtBumpError):
    """The project configuration file is malformed."""


class RegistryError(SbtBumpError):
    """A registry request failed."""

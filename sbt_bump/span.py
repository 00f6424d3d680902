"""Byte-range markers into source files and the span editor.

All offsets are byte offsets into the UTF-8 encoding of a file, matching
what the syntax tree reports. Editing therefore happens on bytes, so a
replacement never shifts or splits a multi-byte character elsewhere in the
file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, model_validator

logger = logging.getLogger(__name__)


class Span(BaseModel):
    """Half-open byte range ``[start, end)`` into one source text."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def _check_order(self) -> Span:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span ({self.start}, {self.end})")
        return self

    @classmethod
    def of(cls, start: int, end: int) -> Span:
        return cls(start=start, end=end)

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, source: bytes) -> bytes:
        return source[self.start : self.end]


class Location(BaseModel):
    """A span bound to the file it occurs in."""

    model_config = ConfigDict(frozen=True)

    file_path: Path
    span: Span


class Edit(BaseModel):
    """Replace the bytes covered by ``span`` with ``text``."""

    model_config = ConfigDict(frozen=True)

    span: Span
    text: str


def apply_edits(edits: list[Edit], original: str) -> str:
    """Apply edits to one file's contents and return the new contents.

    Edits are applied in order of their start offset. An edit that starts
    before the end of the previously applied edit is discarded, so on
    overlap the lowest-starting edit wins and the original bytes under the
    discarded edit are left alone.

    Args:
        edits: Edits for a single file, in any order.
        original: The file's original contents.

    Returns:
        The full rewritten contents.
    """
    source = original.encode("utf-8")
    out = bytearray()
    last_index = 0
    previous_end = 0

    # sorted() is stable, so equal starts keep their given order
    for edit in sorted(edits, key=lambda e: e.span.start):
        if edit.span.start < previous_end:
            logger.warning(
                "Discarding edit at bytes %d-%d: overlaps previous edit ending at %d",
                edit.span.start,
                edit.span.end,
                previous_end,
            )
            continue
        out += source[last_index : edit.span.start]
        out += edit.text.encode("utf-8")
        last_index = edit.span.end
        previous_end = edit.span.end

    out += source[last_index:]
    return out.decode("utf-8")

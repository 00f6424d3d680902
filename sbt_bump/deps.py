"""Merging dependency records into one entry per (organization, artifact).

The same library often appears at several places in a build, e.g. once in
``build.sbt`` and once in ``project/Dependencies.scala``. All occurrences
are gathered under one key so that an update rewrites every one of them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import DependencyEntry, DependencyKey, DependencyRecord


class DependencyMap:
    """Index of logical dependency entries keyed by (organization, artifact)."""

    def __init__(self) -> None:
        self._entries: dict[DependencyKey, DependencyEntry] = {}

    @classmethod
    def from_records(cls, records: Iterable[DependencyRecord]) -> DependencyMap:
        dep_map = cls()
        dep_map.merge_all(records)
        return dep_map

    @classmethod
    def from_file_records(
        cls, per_file: Iterable[Iterable[DependencyRecord]]
    ) -> DependencyMap:
        """Reduce per-file extraction results, in the order given."""
        dep_map = cls()
        for records in per_file:
            dep_map.merge_all(records)
        return dep_map

    def merge(self, record: DependencyRecord) -> None:
        """Add one occurrence, keeping the highest version seen for its key."""
        existing = self._entries.get(record.key)
        if existing is None:
            self._entries[record.key] = DependencyEntry(
                version=record.version, locations=[record.location]
            )
            return
        existing.locations.append(record.location)
        if record.version > existing.version:
            existing.version = record.version

    def merge_all(self, records: Iterable[DependencyRecord]) -> None:
        for record in records:
            self.merge(record)

    def get(self, organization: str, artifact: str) -> DependencyEntry | None:
        return self._entries.get((organization, artifact))

    def keys(self) -> list[DependencyKey]:
        return sorted(self._entries)

    def items(self) -> list[tuple[DependencyKey, DependencyEntry]]:
        """Entries sorted by key."""
        return sorted(self._entries.items(), key=lambda item: item[0])

    def __iter__(self) -> Iterator[tuple[DependencyKey, DependencyEntry]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

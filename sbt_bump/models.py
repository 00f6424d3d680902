"""Data models for sbt-bump.

These Pydantic models carry dependency information from extraction,
through merging, to the final rewrite.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .span import Location
from .versions import Version

DependencyKey = tuple[str, str]


class DependencyRecord(BaseModel):
    """One textual occurrence of a dependency coordinate.

    Attributes:
        organization: Group id, e.g. "dev.zio".
        artifact: Artifact id as written, e.g. "zio-json".
        version: Parsed version at this occurrence.
        location: Where the version literal (or the ``val`` it refers to)
                  sits. This is the span a rewrite replaces.
    """

    model_config = ConfigDict(frozen=True)

    organization: str
    artifact: str
    version: Version
    location: Location

    @property
    def key(self) -> DependencyKey:
        return (self.organization, self.artifact)


class DependencyEntry(BaseModel):
    """All occurrences of one (organization, artifact) across a project.

    Attributes:
        version: Highest version seen at any occurrence.
        locations: Every merged occurrence, including those that held a
                   lower version. Updating the entry rewrites all of them.
    """

    version: Version
    locations: list[Location] = Field(default_factory=list)


class VersionUpdate(BaseModel):
    """A chosen new version and the locations to write it to."""

    version: Version
    locations: list[Location]

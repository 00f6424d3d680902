"""Project configuration from ``.sbt-bump.toml``.

Example:

    repository-url = "https://repo1.maven.org/maven2"
    timeout = 10.0
    workers = 8
    ignore = ["org.scala-lang:*", "dev.zio:zio-json"]

Every key is optional; a missing file means defaults.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import Path

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from tomlkit.exceptions import TOMLKitError

from .errors import ConfigError, SourceFileError

CONFIG_FILE = ".sbt-bump.toml"
DEFAULT_REPOSITORY_URL = "https://repo1.maven.org/maven2"


class Settings(BaseModel):
    """Validated project settings.

    Attributes:
        repository_url: Base URL of the Maven repository to query.
        timeout: Per-request timeout in seconds.
        workers: Thread pool size for parsing and registry lookups.
        ignore: ``group:artifact`` patterns to leave alone; ``*`` is a
                wildcard.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    repository_url: str = Field(default=DEFAULT_REPOSITORY_URL, alias="repository-url")
    timeout: float = Field(default=10.0, gt=0)
    workers: int = Field(default=8, ge=1)
    ignore: list[str] = Field(default_factory=list)

    def is_ignored(self, organization: str, artifact: str) -> bool:
        coordinate = f"{organization}:{artifact}"
        return any(fnmatchcase(coordinate, pattern) for pattern in self.ignore)


def load_settings(project_root: Path) -> Settings:
    """Read ``.sbt-bump.toml`` from the project root, if present.

    Raises:
        ConfigError: If the file is not valid TOML or has bad values.
        SourceFileError: If the file exists but cannot be read.
    """
    path = project_root / CONFIG_FILE
    if not path.exists():
        return Settings()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceFileError(path, "read", str(exc)) from exc

    try:
        data = tomlkit.parse(text).unwrap()
    except TOMLKitError as exc:
        raise ConfigError(f"{path}: {exc}") from exc

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"{path}: {exc}") from exc

"""Available-version lookups against a Maven repository.

Scala libraries are published once per Scala binary version, with the
version appended to the artifact id (``zio-json_2.13``, ``zio-json_3``),
while the build refers to them by their bare name via ``%%``. Lookups
therefore try artifact suffixes in an order chosen from the project's
Scala version and use the first one that has any releases.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor

import requests

from .config import DEFAULT_REPOSITORY_URL
from .errors import RegistryError
from .models import DependencyKey
from .versions import SemVer, Version

logger = logging.getLogger(__name__)

VersionLookup = Callable[[str, str], list[str]]

# sbt 1.x plugins are published against Scala 2.12 and sbt 1.0
SBT_PLUGIN_SUFFIX = "_2.12_1.0"


def artifact_suffixes(scala_version: Version | None) -> list[str]:
    """Cross-version suffixes to try, most likely first."""
    if isinstance(scala_version, SemVer):
        if scala_version.major == 3:
            return ["_3", "_2.13", "_2.12", "", SBT_PLUGIN_SUFFIX]
        if scala_version.major == 2 and scala_version.minor == 13:
            return ["_2.13", "_2.12", "", SBT_PLUGIN_SUFFIX]
        if scala_version.major == 2 and scala_version.minor == 12:
            return ["_2.12", "", SBT_PLUGIN_SUFFIX]
    return ["_2.13", "_3", "_2.12", "", SBT_PLUGIN_SUFFIX]


def parse_metadata(body: bytes | str) -> list[str]:
    """Extract ``<versioning><versions><version>`` entries from maven-metadata.xml."""
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise RegistryError(f"Malformed maven-metadata.xml: {exc}") from exc
    return [
        node.text.strip()
        for node in root.findall("./versioning/versions/version")
        if node.text and node.text.strip()
    ]


class MavenCentralClient:
    """Reads release lists from a Maven 2 layout repository."""

    def __init__(
        self,
        repository_url: str = DEFAULT_REPOSITORY_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.repository_url = repository_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def metadata_url(self, organization: str, artifact: str) -> str:
        group_path = organization.replace(".", "/")
        return f"{self.repository_url}/{group_path}/{artifact}/maven-metadata.xml"

    def get_versions(self, organization: str, artifact: str) -> list[str]:
        """List all published versions of one exact artifact id.

        Returns an empty list when the artifact does not exist.

        Raises:
            RegistryError: On transport errors or unexpected responses.
        """
        url = self.metadata_url(organization, artifact)
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RegistryError(f"Request to {url} failed: {exc}") from exc
        if response.status_code == 404:
            return []
        if not response.ok:
            raise RegistryError(f"Request to {url} failed with status {response.status_code}")
        return parse_metadata(response.content)

    def find_versions(
        self, organization: str, artifact: str, scala_version: Version | None = None
    ) -> list[str]:
        """Versions of the first cross-built variant of ``artifact`` that exists."""
        for suffix in artifact_suffixes(scala_version):
            versions = self.get_versions(organization, f"{artifact}{suffix}")
            if versions:
                return versions
        return []

    def lookup(self, scala_version: Version | None = None) -> VersionLookup:
        """Bind the project's Scala version into a ``(organization, artifact)`` lookup."""
        return lambda organization, artifact: self.find_versions(
            organization, artifact, scala_version
        )


def fetch_available_versions(
    keys: Iterable[DependencyKey], lookup: VersionLookup, *, workers: int = 8
) -> dict[DependencyKey, list[str]]:
    """Run one lookup per key concurrently.

    A key whose lookup raises ``RegistryError`` maps to an empty list.
    """

    def fetch(key: DependencyKey) -> list[str]:
        organization, artifact = key
        try:
            return lookup(organization, artifact)
        except RegistryError as exc:
            logger.warning("Could not fetch versions for %s:%s: %s", organization, artifact, exc)
            return []

    keys = list(keys)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(fetch, keys))
    return dict(zip(keys, results))

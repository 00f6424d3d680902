"""Reading dependencies from an sbt project and writing updates back.

An sbt project declares dependencies in:
1. ``build.sbt`` at the project root (also the source of ``scalaVersion``)
2. ``project/plugins.sbt`` (sbt plugins)
3. any ``*.scala`` file under ``project/`` (e.g. ``Dependencies.scala``),
   except generated sources under ``target/`` directories

Missing files are skipped. Files are parsed concurrently and merged in the
order above, so results do not depend on thread scheduling.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .deps import DependencyMap
from .errors import SourceFileError
from .extract import extract_file
from .models import DependencyRecord, VersionUpdate
from .span import Edit, apply_edits

logger = logging.getLogger(__name__)

BUILD_FILE = "build.sbt"
PLUGINS_FILE = Path("project") / "plugins.sbt"
META_BUILD_DIR = "project"
SOURCE_SUFFIX = ".scala"
OUTPUT_DIR = "target"


def is_sbt_project(project_root: Path) -> bool:
    return (project_root / BUILD_FILE).is_file()


def discover_build_files(project_root: Path) -> list[Path]:
    """List the files that can declare dependencies, in merge order."""
    files: list[Path] = []
    for candidate in (project_root / BUILD_FILE, project_root / PLUGINS_FILE):
        if candidate.is_file():
            files.append(candidate)
        else:
            logger.debug("Skipping missing %s", candidate)

    meta_build = project_root / META_BUILD_DIR
    if meta_build.is_dir():
        files.extend(
            sorted(
                p
                for p in meta_build.rglob(f"*{SOURCE_SUFFIX}")
                if p.is_file() and OUTPUT_DIR not in p.relative_to(meta_build).parts
            )
        )
    return files


def read_source(path: Path) -> str:
    """Read a build file as UTF-8 without newline translation.

    Raises:
        SourceFileError: If the file cannot be read or decoded.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SourceFileError(path, "read", str(exc)) from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SourceFileError(path, "decode", str(exc)) from exc


def write_source(path: Path, contents: str) -> None:
    """Replace a file's contents in one step.

    The new contents go to a temporary file next to the target, which is
    then renamed over it, so a failure leaves the original untouched.

    Raises:
        SourceFileError: If the file cannot be written.
    """
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb", dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as fh:
            tmp_name = fh.name
            fh.write(contents.encode("utf-8"))
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise SourceFileError(path, "write", str(exc)) from exc


def collect_file_dependencies(path: Path, project_root: Path) -> list[DependencyRecord]:
    """Extract the records of one file; ``scalaVersion`` only counts in build.sbt."""
    source = read_source(path)
    is_build_file = path == project_root / BUILD_FILE
    records = extract_file(path, source, include_language_version=is_build_file)
    logger.debug("%s: %d dependencies", path, len(records))
    return records


def collect_sbt_dependencies(project_root: Path, *, workers: int = 8) -> DependencyMap:
    """Build the project's dependency map.

    Args:
        project_root: Directory containing ``build.sbt``.
        workers: Number of files parsed concurrently.

    Raises:
        SourceFileError: If an existing build file cannot be read.
    """
    files = discover_build_files(project_root)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        per_file = list(
            pool.map(lambda p: collect_file_dependencies(p, project_root), files)
        )
    return DependencyMap.from_file_records(per_file)


def group_edits(updates: Iterable[VersionUpdate]) -> dict[Path, list[Edit]]:
    """Turn chosen updates into quoted-literal edits, grouped per file."""
    edits_by_file: dict[Path, list[Edit]] = {}
    for update in updates:
        text = f'"{update.version}"'
        for location in update.locations:
            edits_by_file.setdefault(location.file_path, []).append(
                Edit(span=location.span, text=text)
            )
    return edits_by_file


def write_version_updates(updates: Iterable[VersionUpdate]) -> list[Path]:
    """Rewrite every location of every update with its new version.

    Each file is read, edited in memory and replaced on its own. If one
    file fails, files already written keep their new contents.

    Returns:
        The files that were rewritten, in the order they were written.

    Raises:
        SourceFileError: On the first file that cannot be read or written.
    """
    written: list[Path] = []
    for file_path, edits in group_edits(updates).items():
        original = read_source(file_path)
        updated = apply_edits(edits, original)
        if updated == original:
            continue
        write_source(file_path, updated)
        logger.info("Updated %d version(s) in %s", len(edits), file_path)
        written.append(file_path)
    return written

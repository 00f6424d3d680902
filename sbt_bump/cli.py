"""CLI entry point for sbt-bump."""

from __future__ import annotations

from pathlib import Path

import click

from .config import Settings, load_settings
from .deps import DependencyMap
from .errors import SbtBumpError
from .extract import LANGUAGE_ORGANIZATION, SCALA2_LIBRARY, SCALA3_LIBRARY
from .models import DependencyKey
from .project import collect_sbt_dependencies, is_sbt_project, write_version_updates
from .registry import MavenCentralClient, fetch_available_versions
from .selection import Candidate, build_candidates, plan_updates, select
from .shell import columns, configure_logging, step
from .update_options import Tier
from .versions import Version

PROJECT_ARGUMENT = click.argument(
    "project",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
)


def _load_project(project: Path) -> tuple[Settings, DependencyMap]:
    """Validate the project directory, then read settings and dependencies."""
    if not is_sbt_project(project):
        raise click.ClickException(
            f"No build.sbt found in {project.resolve()}. Run from an sbt project root."
        )
    try:
        settings = load_settings(project)
        dep_map = collect_sbt_dependencies(project, workers=settings.workers)
    except SbtBumpError as exc:
        raise click.ClickException(str(exc)) from exc
    return settings, dep_map


def _scala_version(dep_map: DependencyMap) -> Version | None:
    for artifact in (SCALA3_LIBRARY, SCALA2_LIBRARY):
        entry = dep_map.get(LANGUAGE_ORGANIZATION, artifact)
        if entry is not None:
            return entry.version
    return None


def _find_candidates(settings: Settings, dep_map: DependencyMap) -> list[Candidate]:
    step(f"Checking {len(dep_map)} dependencies against {settings.repository_url}")
    client = MavenCentralClient(settings.repository_url, timeout=settings.timeout)
    keys = [key for key in dep_map.keys() if not settings.is_ignored(*key)]
    available = fetch_available_versions(
        keys, client.lookup(_scala_version(dep_map)), workers=settings.workers
    )
    return build_candidates(dep_map, available, exclude=settings.is_ignored)


def _parse_coordinate(value: str) -> DependencyKey:
    organization, sep, artifact = value.partition(":")
    if not sep or not organization or not artifact:
        raise click.BadParameter(f"expected group:artifact, got {value!r}")
    return organization, artifact


def _display_path(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def _option_cell(version: Version | None) -> str:
    return str(version) if version is not None else "-"


@click.group()
@click.version_option(package_name="sbt-bump")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Find and apply dependency updates in an sbt build."""
    configure_logging(verbose)


@cli.command()
@PROJECT_ARGUMENT
def deps(project: Path) -> None:
    """Print the project's dependencies and where they are declared."""
    _, dep_map = _load_project(project)
    step(f"Found {len(dep_map)} dependencies")
    rows = []
    for (organization, artifact), entry in dep_map:
        places = ", ".join(
            f"{_display_path(loc.file_path, project)}:{loc.span.start}"
            for loc in entry.locations
        )
        rows.append([f"{organization} % {artifact}", str(entry.version), places])
    for line in columns(rows):
        click.echo(f"  {line}")


@cli.command(name="list")
@PROJECT_ARGUMENT
def list_updates(project: Path) -> None:
    """Show outdated dependencies and the newest version in each tier."""
    settings, dep_map = _load_project(project)
    candidates = _find_candidates(settings, dep_map)
    if not candidates:
        click.echo("\nYour project is fully up to date!")
        return

    header = ["dependency", "current", "", "major", "minor", "patch", "pre-release"]
    rows = [header]
    for c in candidates:
        rows.append(
            [
                f"{c.organization} % {c.artifact}",
                str(c.version),
                "→",
                *(_option_cell(c.options.get(tier)) for tier in Tier),
            ]
        )
    click.echo()
    for line in columns(rows):
        click.echo(f"  {line}")
    click.echo(f"\n{len(candidates)} dependencies can be updated.")


@cli.command()
@PROJECT_ARGUMENT
@click.option(
    "--tier",
    type=click.Choice([t.value for t in Tier]),
    default=None,
    help="Tier to apply to every dependency. Defaults to the largest stable update.",
)
@click.option(
    "--only",
    "only",
    multiple=True,
    metavar="GROUP:ARTIFACT",
    help="Update only these dependencies (repeatable).",
)
@click.option("--dry-run", is_flag=True, help="Show what would change without writing.")
def update(project: Path, tier: str | None, only: tuple[str, ...], dry_run: bool) -> None:
    """Rewrite outdated versions in place."""
    keys = {_parse_coordinate(value) for value in only} if only else None
    settings, dep_map = _load_project(project)
    candidates = _find_candidates(settings, dep_map)
    chosen_tier = Tier(tier) if tier is not None else None

    chosen = select(candidates, tier=chosen_tier, only=keys)
    if not chosen:
        click.echo("\nNothing to update.")
        return

    step(f"{'Would update' if dry_run else 'Updating'} {len(chosen)} dependencies")
    rows = [
        [f"{c.organization} % {c.artifact}", str(c.version), "→", str(target)]
        for c, target in chosen
    ]
    for line in columns(rows):
        click.echo(f"  {line}")
    if dry_run:
        return

    updates = plan_updates(candidates, tier=chosen_tier, only=keys)
    try:
        written = write_version_updates(updates)
    except SbtBumpError as exc:
        raise click.ClickException(str(exc)) from exc
    plural = "file" if len(written) == 1 else "files"
    click.echo(f"\nRewrote {len(written)} {plural}.")


def main() -> None:
    cli()

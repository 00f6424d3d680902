"""Tests for sbt_bump.cli."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from sbt_bump.cli import cli
from sbt_bump.config import CONFIG_FILE, DEFAULT_REPOSITORY_URL

PUBLISHED = {
    ("dev.zio", "zio"): ["2.0.0", "2.0.5", "2.1.0"],
    ("org.postgresql", "postgresql"): ["42.5.1", "42.6.0"],
}


def fake_lookup(organization: str, artifact: str) -> list[str]:
    return PUBLISHED.get((organization, artifact), [])


@pytest.fixture
def client() -> Iterator[MagicMock]:
    """Replace the registry client with one backed by PUBLISHED."""
    with patch("sbt_bump.cli.MavenCentralClient") as mock_client:
        mock_client.return_value.lookup.return_value = fake_lookup
        yield mock_client


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestDeps:
    """Tests for the deps command."""

    def test_lists_dependencies(self, runner: CliRunner, sbt_project: Path) -> None:
        result = runner.invoke(cli, ["deps", str(sbt_project)])

        assert result.exit_code == 0, result.output
        assert "Found 6 dependencies" in result.output
        assert "dev.zio % zio " in result.output
        assert "2.0.5" in result.output
        assert "project/Dependencies.scala:" in result.output

    def test_not_an_sbt_project(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["deps", str(tmp_path)])

        assert result.exit_code == 1
        assert "No build.sbt found" in result.output


class TestList:
    """Tests for the list command."""

    def test_shows_outdated(
        self, runner: CliRunner, sbt_project: Path, client: MagicMock
    ) -> None:
        result = runner.invoke(cli, ["list", str(sbt_project)])

        assert result.exit_code == 0, result.output
        assert "2.1.0" in result.output
        assert "42.6.0" in result.output
        assert "2 dependencies can be updated." in result.output
        client.assert_called_once_with(DEFAULT_REPOSITORY_URL, timeout=10.0)

    def test_up_to_date(
        self, runner: CliRunner, sbt_project: Path, client: MagicMock
    ) -> None:
        client.return_value.lookup.return_value = lambda organization, artifact: []

        result = runner.invoke(cli, ["list", str(sbt_project)])

        assert result.exit_code == 0
        assert "Your project is fully up to date!" in result.output

    def test_uses_configured_repository(
        self, runner: CliRunner, sbt_project: Path, client: MagicMock
    ) -> None:
        (sbt_project / CONFIG_FILE).write_text(
            'repository-url = "https://maven.example.com"\ntimeout = 2.0\n'
        )

        runner.invoke(cli, ["list", str(sbt_project)])

        client.assert_called_once_with("https://maven.example.com", timeout=2.0)

    def test_ignored_dependencies_are_not_checked(
        self, runner: CliRunner, sbt_project: Path, client: MagicMock
    ) -> None:
        (sbt_project / CONFIG_FILE).write_text('ignore = ["org.postgresql:*"]\n')

        result = runner.invoke(cli, ["list", str(sbt_project)])

        assert "42.6.0" not in result.output
        assert "1 dependencies can be updated." in result.output

    def test_invalid_config(self, runner: CliRunner, sbt_project: Path) -> None:
        (sbt_project / CONFIG_FILE).write_text("workers = 0\n")

        result = runner.invoke(cli, ["list", str(sbt_project)])

        assert result.exit_code == 1
        assert CONFIG_FILE in result.output


class TestUpdate:
    """Tests for the update command."""

    def test_rewrites_files(
        self, runner: CliRunner, sbt_project: Path, client: MagicMock
    ) -> None:
        result = runner.invoke(cli, ["update", str(sbt_project)])

        assert result.exit_code == 0, result.output
        build = (sbt_project / "build.sbt").read_text()
        meta = (sbt_project / "project" / "Dependencies.scala").read_text()
        assert '"dev.zio" %% "zio" % "2.1.0"' in build
        assert '"org.postgresql" % "postgresql" % "42.6.0"' in build
        assert 'val zio = "2.1.0"' in meta
        assert "Rewrote 2 files." in result.output

    def test_dry_run_writes_nothing(
        self, runner: CliRunner, sbt_project: Path, client: MagicMock
    ) -> None:
        before = (sbt_project / "build.sbt").read_text()

        result = runner.invoke(cli, ["update", "--dry-run", str(sbt_project)])

        assert result.exit_code == 0, result.output
        assert "Would update 2 dependencies" in result.output
        assert (sbt_project / "build.sbt").read_text() == before

    def test_only(self, runner: CliRunner, sbt_project: Path, client: MagicMock) -> None:
        result = runner.invoke(
            cli, ["update", "--only", "org.postgresql:postgresql", str(sbt_project)]
        )

        assert result.exit_code == 0, result.output
        build = (sbt_project / "build.sbt").read_text()
        assert '"42.6.0"' in build
        assert '"dev.zio" %% "zio" % "2.0.0"' in build
        assert "Rewrote 1 file." in result.output

    def test_tier_without_candidates(
        self, runner: CliRunner, sbt_project: Path, client: MagicMock
    ) -> None:
        result = runner.invoke(cli, ["update", "--tier", "major", str(sbt_project)])

        assert result.exit_code == 0
        assert "Nothing to update." in result.output

    def test_patch_tier(
        self, runner: CliRunner, sbt_project: Path, client: MagicMock
    ) -> None:
        """Both available updates are minor bumps, so the patch tier has nothing."""
        result = runner.invoke(cli, ["update", "--tier", "patch", str(sbt_project)])

        assert result.exit_code == 0, result.output
        assert "Nothing to update." in result.output

    def test_bad_coordinate(self, runner: CliRunner, sbt_project: Path) -> None:
        result = runner.invoke(cli, ["update", "--only", "zio", str(sbt_project)])

        assert result.exit_code == 2
        assert "expected group:artifact" in result.output

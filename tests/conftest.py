"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

BUILD_SBT = """\
val animusVersion = "0.4.0"

ThisBuild / scalaVersion := "2.13.12"

libraryDependencies ++= Seq(
  "dev.zio" %% "zio" % "2.0.0",
  "org.postgresql" % "postgresql" % "42.5.1",
  "io.github.kitlangton" %% "animus" % animusVersion
)

libraryDependencies += "dev.zio" %% "zio-test" % "2.0.0" % Test
"""

PLUGINS_SBT = """\
addSbtPlugin("org.scalameta" % "sbt-scalafmt" % "2.5.0")
"""

DEPENDENCIES_SCALA = """\
object Versions {
  val zio = "2.0.5"
}

object Dependencies {
  val zioCore = "dev.zio" %% "zio" % Versions.zio
}
"""


@pytest.fixture
def sbt_project(tmp_path: Path) -> Path:
    """Create a small sbt project with a build file, plugins and a meta-build source."""
    (tmp_path / "build.sbt").write_text(BUILD_SBT)
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    (project_dir / "plugins.sbt").write_text(PLUGINS_SBT)
    (project_dir / "Dependencies.scala").write_text(DEPENDENCIES_SCALA)
    return tmp_path


"""sbt-bump: find and rewrite outdated dependency versions in sbt builds."""

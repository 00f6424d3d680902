"""Terminal output helpers.

Provides logging setup plus the small formatting helpers the CLI uses to
separate phases and print dependency tables.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False) -> None:
    """Route log records through a Rich handler on stderr.

    Args:
        verbose: Show DEBUG records (skipped files, dropped declarations,
                 registry requests) instead of only INFO and above.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        ],
        force=True,
    )


def step(msg: str) -> None:
    """Print a visually distinct step header."""
    click.echo(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def columns(rows: list[list[str]], *, sep: str = "  ") -> list[str]:
    """Left-align each column of ``rows`` to its widest cell."""
    if not rows:
        return []
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    return [
        sep.join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
        for row in rows
    ]

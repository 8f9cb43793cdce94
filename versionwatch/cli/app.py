"""Main Typer application — imports and registers all CLI commands.

Entry point: ``versionwatch`` (configured via pyproject.toml scripts).

Commands: check, pinned.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from versionwatch.cli.commands.check import check_cmd
from versionwatch.cli.commands.pinned import pinned_cmd
from versionwatch.config import config

app = typer.Typer(
    name="versionwatch",
    help="versionwatch: detect newer upstream Ruby and Bundler releases for CI.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to VERSIONWATCH_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Configure logging.  Log records go to stderr; stdout carries signals only."""
    level = (log_level or config.log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="check", help="Compare pinned versions with upstream and emit signals.")(check_cmd)
app.command(name="pinned", help="Show the versions pinned in the repository.")(pinned_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()

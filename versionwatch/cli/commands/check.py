"""``versionwatch check`` — run the full version check and emit signals.

Reads the pinned versions, fetches the upstream ones, and prints the
``::set-output`` signals to stdout.  Exits 0 whether or not updates were
found, 1 on a fatal failure.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from versionwatch.config import CheckerConfig
from versionwatch.core.checker import VersionChecker
from versionwatch.renderer import SummaryRenderer

err_console = Console(stderr=True)


def build_config(**overrides: Any) -> CheckerConfig:
    """Build a ``CheckerConfig`` from the environment plus non-None CLI overrides."""
    return CheckerConfig(**{k: v for k, v in overrides.items() if v is not None})


def check_cmd(
    root: Path = typer.Option(
        None,
        "--root",
        "-r",
        help="Repository root the local files are resolved against.",
    ),
    workflow: Path = typer.Option(
        None,
        "--workflow",
        "-w",
        help="CI pipeline definition holding the pinned runtime versions.",
    ),
    dockerfile: Path = typer.Option(
        None,
        "--dockerfile",
        "-d",
        help="Container build definition holding the pinned lock-tool version.",
    ),
    timeout: float = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Per-request timeout in seconds.",
    ),
    summary: bool = typer.Option(
        False,
        "--summary/--no-summary",
        help="Print a pinned-vs-latest table to stderr.",
    ),
) -> None:
    """Check for newer upstream runtime and lock-tool versions.

    Signals (stdout):
    - UPDATES_NEEDED: true or false
    - UPDATE_MESSAGE, LATEST_32, LATEST_33, LATEST_34, LATEST_BUNDLER
      (only when updates are needed)
    """
    config = build_config(
        repo_root=root,
        workflow_path=workflow,
        dockerfile_path=dockerfile,
        request_timeout=timeout,
    )
    outcome = VersionChecker(config).run()

    if not outcome.ok:
        err_console.print(f"[bold red]Version check failed:[/bold red] {escape(outcome.error)}")
        raise typer.Exit(code=outcome.exit_code)

    if summary and outcome.report is not None:
        SummaryRenderer(
            err_console,
            runtime_label=config.runtime_label,
            lock_tool_label=config.lock_tool_label,
        ).print_report(outcome.report)

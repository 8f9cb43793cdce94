"""``versionwatch pinned`` — show the locally pinned versions.

Parses the CI pipeline and container definitions without touching the
network.  Useful for checking that the patterns still match after editing
either file.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from versionwatch.cli.commands.check import build_config
from versionwatch.core.errors import VersionCheckError
from versionwatch.core.pinned import parse_pinned_versions
from versionwatch.renderer import SummaryRenderer

console = Console()
err_console = Console(stderr=True)


def pinned_cmd(
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
) -> None:
    """Parse and display the pinned runtime and lock-tool versions."""
    config = build_config(
        repo_root=root,
        workflow_path=workflow,
        dockerfile_path=dockerfile,
    )
    try:
        pinned = parse_pinned_versions(config.workflow_file, config.dockerfile)
    except VersionCheckError as exc:
        err_console.print(f"[bold red]Cannot read pinned versions:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    SummaryRenderer(
        console,
        runtime_label=config.runtime_label,
        lock_tool_label=config.lock_tool_label,
    ).print_pinned(pinned)

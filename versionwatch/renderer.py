"""Rich renderer for check results.

Draws pinned-vs-latest tables for humans. Always pointed at stderr by the
CLI so stdout stays reserved for the signal protocol.

Color scheme
------------
- green  : up to date
- yellow : update available
- dim    : no upstream version / not configured
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from versionwatch.models.report import UpdateReport
from versionwatch.models.versions import PinnedVersions


def _status(pinned: str | None, latest: str | None) -> str:
    if not latest:
        return "[dim]unknown[/dim]"
    if pinned == latest:
        return "[green]up to date[/green]"
    return "[yellow]update[/yellow]"


class SummaryRenderer:
    """Renders pinned and latest versions as Rich tables.

    Parameters
    ----------
    console:
        Rich Console to print to.  Defaults to a stderr console.
    runtime_label / lock_tool_label:
        Names shown in the first column.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        runtime_label: str = "Ruby",
        lock_tool_label: str = "Bundler",
    ) -> None:
        self._console = console or Console(stderr=True)
        self._runtime_label = runtime_label
        self._lock_tool_label = lock_tool_label

    def render_pinned(self, pinned: PinnedVersions) -> Table:
        """Build a table of the locally pinned versions."""
        table = Table(title="Pinned Versions")
        table.add_column("Component", style="cyan")
        table.add_column("Pinned", style="bold")

        for minor, version in pinned.runtime.items():
            table.add_row(
                f"{self._runtime_label} {minor}",
                version or "[dim]not configured[/dim]",
            )
        table.add_row(self._lock_tool_label, pinned.lock_tool)
        return table

    def render_report(self, report: UpdateReport) -> Table:
        """Build a pinned-vs-latest comparison table."""
        table = Table(title="Version Check")
        table.add_column("Component", style="cyan")
        table.add_column("Pinned")
        table.add_column("Latest")
        table.add_column("Status", justify="center")

        for minor, latest in report.latest.runtime.items():
            pinned = report.pinned.runtime.get(minor)
            table.add_row(
                f"{self._runtime_label} {minor}",
                pinned or "[dim]not configured[/dim]",
                latest or "[dim]-[/dim]",
                _status(pinned, latest),
            )

        lock_latest = report.latest.lock_tool
        table.add_row(
            self._lock_tool_label,
            report.pinned.lock_tool,
            lock_latest or "[dim]-[/dim]",
            _status(report.pinned.lock_tool, lock_latest),
        )
        return table

    def print_pinned(self, pinned: PinnedVersions) -> None:
        self._console.print(self.render_pinned(pinned))

    def print_report(self, report: UpdateReport) -> None:
        """Print the comparison table and a one-panel verdict."""
        self._console.print(self.render_report(report))
        if report.needed:
            self._console.print(
                Panel(
                    report.message,
                    title="[bold yellow]Updates needed[/bold yellow]",
                    border_style="yellow",
                )
            )
        else:
            self._console.print("[bold green]All pinned versions are current.[/bold green]")

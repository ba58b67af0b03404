"""Rich rendering of collation results for the CLI."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from deplicenses.core.models import CollationReport

logger = logging.getLogger("deplicenses.runtime.display")


class ReportDisplay:
    """Summarises a CollationReport on a rich console.

    Per-dependency counts go into a table; failures are listed below it.
    """

    def __init__(self, console: Optional[Console] = None, max_failures: int = 20) -> None:
        self.console = console or Console(stderr=True)
        self.max_failures = max_failures

    def build_table(self, report: CollationReport) -> Table:
        table = Table(show_header=True, header_style="bold", expand=False)
        table.add_column("Dependency", style="cyan")
        table.add_column("Copied", justify="right", style="green")
        table.add_column("Failed", justify="right")

        for name, outcomes in report.by_dependency().items():
            copied = sum(1 for o in outcomes if o.ok)
            failed = len(outcomes) - copied
            table.add_row(
                name,
                str(copied),
                Text(str(failed), style="red" if failed else "dim"),
            )
        return table

    def build_failures(self, report: CollationReport) -> Optional[Group]:
        failed = report.failed
        if not failed:
            return None
        lines = [Text("Failures:", style="bold red")]
        for outcome in failed[: self.max_failures]:
            line = Text("  ✗ ", style="red")
            line.append(outcome.dependency, style="red")
            line.append(f" {outcome.destination_path}", style="dim")
            line.append(f": {outcome.error}")
            lines.append(line)
        remaining = len(failed) - self.max_failures
        if remaining > 0:
            lines.append(Text(f"  ... +{remaining} more", style="dim red"))
        return Group(*lines)

    def build(self, report: CollationReport) -> Panel:
        summary = Text()
        summary.append(f"Files: {len(report.succeeded)} copied", style="green")
        summary.append(" │ ", style="dim")
        summary.append(
            f"{len(report.failed)} failed",
            style="red" if report.failed else "dim",
        )
        summary.append(" │ ", style="dim")
        summary.append(f"Destination: {report.destination}", style="dim")

        parts = [self.build_table(report), summary]
        failures = self.build_failures(report)
        if failures is not None:
            parts.append(failures)

        return Panel(
            Group(*parts),
            title=Text("Collected licenses", style="bold yellow"),
            border_style="yellow" if report.ok else "red",
            padding=(0, 1),
        )

    def render(self, report: CollationReport) -> None:
        self.console.print(self.build(report))


__all__ = ["ReportDisplay"]

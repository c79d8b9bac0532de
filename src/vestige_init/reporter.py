"""Console output for the installer: banner, per-target status lines, summary."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from vestige_init.outcome import OutcomeStatus, ReconciliationOutcome, RunReport
from vestige_init.targets.base import TargetDescriptor, TargetRegistry
from vestige_init.verifier import TargetStatus

BANNER = """
  vestige init v2.0
  Give your AI a brain in 10 seconds.
  Now with 3D dashboard at localhost:3927/dashboard
"""

DASHBOARD_URL = "http://localhost:3927/dashboard"
DOCS_URL = "https://github.com/samvallad33/vestige"

_INSTALL_HINT = """\
Install manually:

  # macOS (Apple Silicon)
  curl -L https://github.com/samvallad33/vestige/releases/latest/download/vestige-mcp-aarch64-apple-darwin.tar.gz | tar -xz
  sudo mv vestige-mcp vestige vestige-restore /usr/local/bin/

  # Or via npm
  npm install -g vestige-mcp-server

Then run: vestige-init"""

_TAG_STYLES = {
    "found": "cyan",
    "done": "green",
    "skip": "yellow",
    "fail": "red",
}


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


class ConsoleReporter:
    """Line-oriented status output. Tags are plain text so output can be grepped."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def _print(self, text: Text) -> None:
        # soft_wrap keeps long paths on one line regardless of terminal width
        self.console.print(text, soft_wrap=True)

    def _tagged(self, tag: str, name: str, detail: str | None = None) -> None:
        line = Text("  ")
        line.append(f"[{tag}]", style=_TAG_STYLES[tag])
        line.append(f" {name}")
        if detail:
            line.append(f" — {detail}")
        self._print(line)

    def banner(self) -> None:
        self._print(Text(BANNER))

    def looking_for_binary(self, binary_name: str) -> None:
        self._print(Text(f"Looking for {binary_name} binary..."))

    def binary_found(self, path) -> None:  # noqa: ANN001
        self._print(Text(f"  Found: {path}"))
        self.console.print()

    def binary_missing(self, binary_name: str, searched: Sequence[str]) -> None:
        self.console.print()
        self._print(Text(f"{binary_name} not found.", style="red"))
        if searched:
            self._print(Text("Searched:"))
            for location in searched:
                self._print(Text(f"  {location}"))
        self.console.print()
        self._print(Text(_INSTALL_HINT))

    def scanning(self) -> None:
        self._print(Text("Scanning for IDEs..."))

    def found(self, target: TargetDescriptor) -> None:
        self._tagged("found", target.name)

    def no_targets(self, registry: TargetRegistry) -> None:
        self._print(Text("  No supported IDEs found."))
        self.console.print()
        self._print(Text(f"Supported: {', '.join(registry.names())}"))

    def configuring(self, dry_run: bool) -> None:
        self.console.print()
        if dry_run:
            self._print(Text("Dry-run mode — no files will be written.", style="yellow"))
        self._print(Text("Configuring Vestige..."))

    def outcome(self, outcome: ReconciliationOutcome) -> None:
        target = outcome.target
        if outcome.status is OutcomeStatus.CONFIGURED:
            self._tagged("done", target.name)
            if target.note:
                self._print(Text(f"         {target.note}"))
        elif outcome.status is OutcomeStatus.SKIPPED:
            self._tagged("skip", target.name, outcome.message)
        else:
            self._tagged("fail", target.name, outcome.message)

    def summary(self, report: RunReport) -> None:
        self.console.print()
        configured, skipped, failed = report.configured, report.skipped, report.failed

        if configured > 0:
            line = f"Vestige configured for {configured} IDE{_plural(configured)}."
            if skipped > 0:
                line += f" ({skipped} already configured)"
        elif skipped > 0 and failed == 0:
            line = "All detected IDEs already have Vestige configured."
        else:
            line = "Vestige was not configured for any IDE."
        if failed > 0:
            line += f" {failed} failed."
        self._print(Text(line, style="bold"))

        if configured > 0:
            self.console.print()
            self._print(Text("Next steps:"))
            self._print(Text("  1. Restart your IDE(s)"))
            self._print(Text('  2. Ask your AI: "Remember that I prefer TypeScript over JavaScript"'))
            self._print(Text('  3. New session: "What are my coding preferences?"'))
            self.console.print()
            self._print(Text("Your AI has a brain now."))
            self.console.print()
            self._print(Text(f"  Dashboard: {DASHBOARD_URL}"))

        self.console.print()
        self._print(Text(f"Docs: {DOCS_URL}"))

    def status_table(self, statuses: list[TargetStatus]) -> None:
        """Render per-target detection and registration state as a rich table."""
        table = Table(title="Vestige Status", show_lines=True, min_width=60)
        table.add_column("Detected", justify="center", width=9)
        table.add_column("Configured", justify="center", width=11)
        table.add_column("Target", style="bold")
        table.add_column("Details")

        for status in statuses:
            table.add_row(
                "[green]yes[/green]" if status.installed else "[dim]no[/dim]",
                "[green]yes[/green]" if status.registered else "[red]no[/red]",
                status.target.name,
                Text(status.detail),
            )

        self.console.print(table)

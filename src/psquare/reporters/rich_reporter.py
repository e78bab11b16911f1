from __future__ import annotations

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

from psquare.contracts import Reporter
from psquare.models import QuantileSummary


class RichReporter(Reporter):
    """Render quantile summaries using Rich tables."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def render(self, summary: QuantileSummary, title: str) -> None:
        self._console.print()
        self._console.print(f"Quantiles for {title}", style="bold underline")
        self._console.print(Rule(style="dim"))
        self._console.print(self._build_moments_section(summary))
        self._console.print()

        self._console.print(f"Estimates ({len(summary.quantiles)})", style="bold")
        self._console.print(Rule(style="dim"))
        self._console.print(self._build_quantiles_section(summary))

    @staticmethod
    def _build_moments_section(summary: QuantileSummary) -> Table:
        table = Table.grid(padding=(0, 3))
        table.add_column("Metric", style="bold cyan")
        table.add_column("Value")

        table.add_row("count:", f"{summary.count:,}")
        table.add_row("mean:", f"{summary.mean:.6f}")
        table.add_row("std:", f"{summary.std:.6f}")
        return table

    @staticmethod
    def _build_quantiles_section(summary: QuantileSummary) -> Table:
        table = Table.grid(padding=(0, 3))
        table.add_column("Quantile", style="bold cyan")
        table.add_column("Estimate")

        for key, estimate in summary.quantiles.items():
            table.add_row(f"{key}:", f"{estimate:.6f}")
        return table

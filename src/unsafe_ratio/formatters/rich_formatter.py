"""Rich terminal formatter for unsafe-ratio."""

import io

from rich.console import Console
from rich.table import Table

from ..models import AnalysisRun
from .base import BaseFormatter


def _ratio_label(ratio: float) -> str:
    if ratio >= 0.5:
        return f"[red bold]{ratio:.1%}[/red bold]"
    elif ratio >= 0.2:
        return f"[red]{ratio:.1%}[/red]"
    elif ratio > 0.0:
        return f"[yellow]{ratio:.1%}[/yellow]"
    else:
        return f"[green]{ratio:.1%}[/green]"


class RichFormatter(BaseFormatter):
    """Table of per-file ratios with a total footer."""

    def __init__(self, show_percent: bool = False, console: "Console | None" = None):
        super().__init__(show_percent=show_percent)
        self.console = console or Console()

    def render(self, run: AnalysisRun) -> None:
        self.console.print(self._table(run))

    def format(self, run: AnalysisRun) -> str:
        buf = io.StringIO()
        console = Console(file=buf, width=self.console.width, force_terminal=False)
        console.print(self._table(run))
        return buf.getvalue().rstrip("\n")

    def _table(self, run: AnalysisRun) -> Table:
        table = Table(title="Unsafe statements", show_footer=True)
        total = run.total
        table.add_column("File", footer="total", style="cyan")
        table.add_column("Unsafe", footer=str(total.unsafe_count), justify="right")
        table.add_column("Total", footer=str(total.total_count), justify="right")
        table.add_column("Ratio", footer=_ratio_label(total.ratio), justify="right")
        for r in run.results:
            table.add_row(r.path, str(r.unsafe_count), str(r.total_count), _ratio_label(r.ratio))
        return table

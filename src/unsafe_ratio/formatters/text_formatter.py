"""Plain text formatter: one ``path: unsafe/total`` line per file."""

from ..models import AnalysisRun, FileResult, TotalResult
from .base import BaseFormatter


class TextFormatter(BaseFormatter):
    """Per-file ratio lines followed by a ``total:`` line."""

    def format(self, run: AnalysisRun) -> str:
        lines = [self._line(r.path, r) for r in run.results]
        lines.append(self._line("total", run.total))
        return "\n".join(lines)

    def _line(self, label: str, result: "FileResult | TotalResult") -> str:
        line = f"{label}: {result.unsafe_count}/{result.total_count}"
        if self.show_percent:
            line += f" ({result.ratio:.1%})"
        return line

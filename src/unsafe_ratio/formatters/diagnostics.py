"""Diagnostics for files excluded from the total.

Malformed files are shown compiler-style, with the offending source line and
a caret under the reported column:

    error: unable to parse file
     --> src/lib.rs:3:5
      |
    3 |     }
      |     ^ unmatched closing brace '}'
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..exceptions import FileAccessError, MalformedInputError
from ..models import FileFailure


class DiagnosticRenderer:
    """Render FileFailure entries to the error console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True, soft_wrap=True)

    def render(self, failure: FileFailure, source: Optional[str] = None) -> None:
        """Print one diagnostic.

        Args:
            failure: The failure to describe
            source: File contents for the excerpt; read from disk when omitted
        """
        error = failure.error
        if isinstance(error, MalformedInputError):
            self._render_malformed(failure.path, error, source)
        elif isinstance(error, FileAccessError):
            self.console.print(
                f"[red bold]error[/red bold][bold]: cannot read file[/bold] "
                f"{escape(failure.path)}: {escape(error.reason)}"
            )
        else:
            self.console.print(f"[red bold]error[/red bold]: {escape(str(error))}")

    def _render_malformed(
        self, path: str, error: MalformedInputError, source: Optional[str]
    ) -> None:
        code_line = self._source_line(path, error.line, source)
        if code_line is None or error.column is None:
            where = f":{error.location}" if error.location else ""
            self.console.print(
                f"[red bold]error[/red bold][bold]: unable to parse file[/bold] "
                f"{escape(path)}{where}: {escape(error.reason)}"
            )
            return

        line_label = str(error.line)
        indent = " " * len(line_label)
        offset = " " * (error.column - 1)
        self.console.print("[red bold]error[/red bold][bold]: unable to parse file[/bold]")
        self.console.print(
            f"{indent}[blue bold]-->[/blue bold] {escape(path)}:{error.line}:{error.column}"
        )
        self.console.print(f"{indent} [blue bold]|[/blue bold]")
        self.console.print(
            f"[blue bold]{line_label} |[/blue bold] {escape(code_line.rstrip())}"
        )
        self.console.print(
            f"{indent} [blue bold]|[/blue bold] {offset}[red bold]^[/red bold] "
            f"[red]{escape(error.reason)}[/red]"
        )

    @staticmethod
    def _source_line(path: str, line: Optional[int], source: Optional[str]) -> Optional[str]:
        if line is None:
            return None
        if source is None:
            try:
                source = Path(path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                return None
        lines = source.splitlines()
        if not 1 <= line <= len(lines):
            return None
        return lines[line - 1]

"""CSV formatter for unsafe-ratio."""

import csv
import io

from ..models import AnalysisRun
from .base import BaseFormatter


class CsvFormatter(BaseFormatter):
    """One row per file plus a trailing ``total`` row."""

    def format(self, run: AnalysisRun) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(["path", "unsafe_count", "total_count", "ratio"])
        for r in run.results:
            writer.writerow([r.path, r.unsafe_count, r.total_count, f"{r.ratio:.4f}"])
        total = run.total
        writer.writerow(["total", total.unsafe_count, total.total_count, f"{total.ratio:.4f}"])
        return buf.getvalue().rstrip("\n")

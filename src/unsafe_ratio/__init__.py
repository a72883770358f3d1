"""
unsafe-ratio - how much of a Rust codebase runs in unsafe code

Splits Rust source into statements and reports, per file and in total, how
many of them lie inside an ``unsafe`` block or ``unsafe fn`` body.
"""

__version__ = "0.1.0"

from .analysis import UnsafeRatioAnalyzer, analyze_source
from .config import AnalysisConfig, load_config
from .models import AnalysisRun, FileFailure, FileResult, StatementCounts, TotalResult

__all__ = [
    "analyze_source",
    "UnsafeRatioAnalyzer",
    "AnalysisConfig",
    "load_config",
    "AnalysisRun",
    "FileFailure",
    "FileResult",
    "StatementCounts",
    "TotalResult",
]

"""Statement classification and the per-run analysis engine."""

from .classifier import StatementClassifier, StatementEnd, StatementRecord
from .engine import UnsafeRatioAnalyzer, analyze_source

__all__ = [
    "StatementClassifier",
    "StatementEnd",
    "StatementRecord",
    "UnsafeRatioAnalyzer",
    "analyze_source",
]

"""Base formatter interface for unsafe-ratio output rendering."""

from abc import ABC, abstractmethod

from ..models import AnalysisRun


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    def __init__(self, show_percent: bool = False):
        self.show_percent = show_percent

    def render(self, run: AnalysisRun) -> None:
        """Print the formatted run to stdout."""
        print(self.format(run))

    @abstractmethod
    def format(self, run: AnalysisRun) -> str:
        """Return formatted string representation of the run."""

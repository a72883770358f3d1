"""JSON formatter for unsafe-ratio."""

import json

from ..models import AnalysisRun
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the run as a JSON object with files, failures and total."""

    def format(self, run: AnalysisRun) -> str:
        return json.dumps(run.to_dict(), indent=2)

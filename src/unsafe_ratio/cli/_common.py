"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

err_console = Console(stderr=True, soft_wrap=True)


def resolve_config(
    config: Optional[Path] = None,
    output_format: Optional[str] = None,
    percent: Optional[bool] = None,
    strict: Optional[bool] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build the analysis config from CLI options."""
    overrides = {
        "output_format": output_format,
        "show_percent": percent,
        "strict": strict,
        "workers": workers,
    }
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)

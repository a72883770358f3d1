"""Configuration loading and management for unsafe-ratio.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Project config (./unsafe-ratio.toml)
    3. Explicit config file (--config)
    4. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=4, quiet=True)
    >>> config.verbosity
    'quiet'
    >>> config.workers
    4
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional

from .exceptions import InvalidConfigError, UnsafeRatioError

Verbosity = Literal["quiet", "normal", "verbose"]
OutputFormat = Literal["text", "json", "csv", "rich"]

OUTPUT_FORMATS = ("text", "json", "csv", "rich")
VERBOSITIES = ("quiet", "normal", "verbose")

PROJECT_CONFIG_NAME = "unsafe-ratio.toml"


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        workers: Threads used to scan files (1 = sequential)
        parallel_threshold: Minimum number of files before threads are used
        max_file_size_mb: Files larger than this are reported as unreadable
        extensions: Suffixes collected when a directory is given
        exclude_dirs: Directory names skipped while walking directories
        output_format: One of "text", "json", "csv", "rich"
        show_percent: Append the unsafe percentage to text output
        strict: Exit non-zero if any file failed
        verbosity: One of "quiet", "normal", "verbose"
    """

    workers: int = 1
    parallel_threshold: int = 8
    max_file_size_mb: float = 10.0

    extensions: list[str] = field(default_factory=lambda: [".rs"])
    exclude_dirs: list[str] = field(default_factory=lambda: ["target", ".git"])

    output_format: OutputFormat = "text"
    show_percent: bool = False
    strict: bool = False
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.parallel_threshold < 1:
            raise InvalidConfigError(
                "parallel_threshold", self.parallel_threshold, "must be at least 1"
            )
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if not self.extensions:
            raise InvalidConfigError("extensions", self.extensions, "must not be empty")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "must start with '.'")
        if self.output_format not in OUTPUT_FORMATS:
            raise InvalidConfigError(
                "output_format", self.output_format, f"choose from {', '.join(OUTPUT_FORMATS)}"
            )
        if self.verbosity not in VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"choose from {', '.join(VERBOSITIES)}"
            )

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def verbose(self) -> bool:
        return self.verbosity == "verbose"

    @property
    def quiet(self) -> bool:
        return self.verbosity == "quiet"


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask file values.

    Returns:
        Validated AnalysisConfig instance

    Raises:
        UnsafeRatioError: If a config file is missing or unreadable
        InvalidConfigError: If a key is unknown or a value is invalid
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise UnsafeRatioError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    # Convert verbosity boolean flags to string
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(AnalysisConfig)}
    for key in merged:
        if key not in known:
            raise InvalidConfigError(key, merged[key], "unknown configuration key")

    return AnalysisConfig(**merged)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return the ``[unsafe-ratio]`` table or the whole document.

    Raises:
        UnsafeRatioError: If the file cannot be read or parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise UnsafeRatioError(f"Invalid config file '{path}': {e}")

    section = data.get("unsafe-ratio")
    if isinstance(section, dict):
        return dict(section)
    return data

"""Exception hierarchy for unsafe-ratio."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    MalformedInputError,
)
from .base import UnsafeRatioError
from .config import (
    ConfigurationError,
    InvalidConfigError,
)

__all__ = [
    "UnsafeRatioError",
    "AnalysisError",
    "FileAccessError",
    "MalformedInputError",
    "ConfigurationError",
    "InvalidConfigError",
]

"""Analysis-related exceptions: file access and malformed source."""

from pathlib import Path
from typing import Dict, Optional

from .base import UnsafeRatioError


class AnalysisError(UnsafeRatioError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class MalformedInputError(AnalysisError):
    """Raised when source text has unbalanced delimiters or unterminated literals.

    The lexer and scope tracker do not know which file they are scanning, so
    they raise without a path; the engine attaches it with :meth:`with_path`.

    Attributes:
        reason: Nature of the imbalance (e.g. "unmatched closing brace")
        line: 1-based line of the offending token, if known
        column: 1-based column of the offending token, if known
        filepath: File the error belongs to, once known
    """

    def __init__(
        self,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        filepath: Optional[Path] = None,
    ):
        details: Dict[str, str] = {"reason": reason}
        if filepath is not None:
            details["filepath"] = str(filepath)
        if line is not None:
            details["line"] = str(line)
        if column is not None:
            details["column"] = str(column)

        if filepath is not None:
            message = f"Malformed input in {filepath}: {reason}"
        else:
            message = f"Malformed input: {reason}"
        super().__init__(message, details=details)
        self.reason = reason
        self.line = line
        self.column = column
        self.filepath = filepath

    def with_path(self, filepath: Path) -> "MalformedInputError":
        """Return a copy of this error bound to ``filepath``."""
        return MalformedInputError(self.reason, self.line, self.column, filepath)

    @property
    def location(self) -> str:
        """``line:column`` or an empty string when the position is unknown."""
        if self.line is None:
            return ""
        if self.column is None:
            return str(self.line)
        return f"{self.line}:{self.column}"

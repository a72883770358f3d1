"""Base exception for unsafe-ratio."""

from typing import Any, Dict, Optional


class UnsafeRatioError(Exception):
    """Root of the unsafe-ratio error hierarchy.

    ``details`` holds string key/value context (file path, line, offending
    key) that is shown after the message and carried into JSON output.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used by the JSON report."""
        return {
            "kind": self.kind,
            "reason": getattr(self, "reason", self.message),
            "details": dict(self.details),
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({context})"

"""Data models for unsafe-ratio"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from .exceptions import AnalysisError


@dataclass(frozen=True)
class StatementCounts:
    """Statement tallies for one source text."""

    unsafe_count: int = 0
    total_count: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.unsafe_count <= self.total_count:
            raise ValueError(
                f"unsafe_count must be within [0, total_count], "
                f"got {self.unsafe_count}/{self.total_count}"
            )


@dataclass(frozen=True)
class FileResult:
    """Counts for a single successfully scanned file"""

    path: str
    unsafe_count: int
    total_count: int

    @classmethod
    def from_counts(cls, path: str, counts: StatementCounts) -> "FileResult":
        return cls(path=path, unsafe_count=counts.unsafe_count, total_count=counts.total_count)

    @property
    def ratio(self) -> float:
        """Fraction of statements that are unsafe (0.0 for an empty file)."""
        if self.total_count == 0:
            return 0.0
        return self.unsafe_count / self.total_count

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "unsafe_count": self.unsafe_count,
            "total_count": self.total_count,
            "ratio": self.ratio,
        }


@dataclass(frozen=True)
class TotalResult:
    """Sum of FileResult counts across a run.

    Addition is commutative and associative, so partial totals from any
    grouping of files combine to the same value.
    """

    unsafe_count: int = 0
    total_count: int = 0

    def __add__(self, other: "TotalResult | FileResult") -> "TotalResult":
        return TotalResult(
            unsafe_count=self.unsafe_count + other.unsafe_count,
            total_count=self.total_count + other.total_count,
        )

    @classmethod
    def of(cls, results: Iterable[FileResult]) -> "TotalResult":
        total = cls()
        for result in results:
            total = total + result
        return total

    @property
    def ratio(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.unsafe_count / self.total_count

    def to_dict(self) -> dict:
        return {
            "unsafe_count": self.unsafe_count,
            "total_count": self.total_count,
            "ratio": self.ratio,
        }


@dataclass(frozen=True)
class FileFailure:
    """A file excluded from the total, with the error that excluded it"""

    path: str
    error: AnalysisError

    @property
    def kind(self) -> str:
        return self.error.kind

    def to_dict(self) -> dict:
        return {"path": self.path, **self.error.to_dict()}


@dataclass
class AnalysisRun:
    """Outcome of analyzing a batch of paths, in input order"""

    results: List[FileResult] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)

    @property
    def total(self) -> TotalResult:
        """Aggregate over successfully scanned files only."""
        return TotalResult.of(self.results)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def to_dict(self) -> dict:
        return {
            "files": [r.to_dict() for r in self.results],
            "failures": [f.to_dict() for f in self.failures],
            "total": self.total.to_dict(),
        }

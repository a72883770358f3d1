"""Tests for result models and aggregation."""

import pytest

from unsafe_ratio.exceptions import FileAccessError, MalformedInputError
from unsafe_ratio.models import (
    AnalysisRun,
    FileFailure,
    FileResult,
    StatementCounts,
    TotalResult,
)


class TestStatementCounts:

    def test_defaults(self):
        assert StatementCounts() == StatementCounts(0, 0)

    def test_unsafe_cannot_exceed_total(self):
        with pytest.raises(ValueError):
            StatementCounts(unsafe_count=3, total_count=2)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            StatementCounts(unsafe_count=-1, total_count=2)


class TestTotals:

    def test_sum_of_files(self):
        results = [
            FileResult("a.rs", 12, 15),
            FileResult("b.rs", 0, 4),
            FileResult("c.rs", 5, 19),
        ]
        total = TotalResult.of(results)
        assert total == TotalResult(unsafe_count=17, total_count=38)

    def test_grouping_does_not_matter(self):
        a, b, c = FileResult("a", 1, 2), FileResult("b", 3, 5), FileResult("c", 0, 7)
        left = (TotalResult() + a + b) + c
        right = TotalResult() + a + (TotalResult() + b + c)
        assert left == right == TotalResult.of([c, b, a])

    def test_empty_total(self):
        total = TotalResult.of([])
        assert total == TotalResult(0, 0)
        assert total.ratio == 0.0

    def test_ratio(self):
        assert FileResult("a.rs", 1, 4).ratio == pytest.approx(0.25)
        assert FileResult("a.rs", 0, 0).ratio == 0.0

    def test_from_counts(self):
        result = FileResult.from_counts("x.rs", StatementCounts(2, 5))
        assert result == FileResult("x.rs", 2, 5)


class TestAnalysisRun:

    def test_to_dict(self):
        run = AnalysisRun(
            results=[FileResult("a.rs", 1, 2)],
            failures=[FileFailure("b.rs", MalformedInputError("unclosed '{'", 3, 1, "b.rs"))],
        )
        data = run.to_dict()
        assert data["files"] == [
            {"path": "a.rs", "unsafe_count": 1, "total_count": 2, "ratio": 0.5}
        ]
        assert data["failures"][0]["kind"] == "MalformedInputError"
        assert data["failures"][0]["reason"] == "unclosed '{'"
        assert data["failures"][0]["details"]["line"] == "3"
        assert data["total"] == {"unsafe_count": 1, "total_count": 2, "ratio": 0.5}

    def test_total_ignores_failures(self):
        run = AnalysisRun(
            results=[FileResult("a.rs", 1, 2)],
            failures=[FileFailure("gone.rs", FileAccessError("gone.rs", "No such file"))],
        )
        assert run.total == TotalResult(1, 2)
        assert run.has_failures

    def test_no_failures(self):
        assert not AnalysisRun().has_failures

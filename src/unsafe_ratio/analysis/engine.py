"""Per-file and per-run analysis.

``analyze_source`` runs the lexer, scope tracker and classifier over one
text. :class:`UnsafeRatioAnalyzer` applies it to a batch of paths, keeping
going when a file is missing or malformed and summing only the files that
scanned cleanly.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Optional, Union

from ..config import AnalysisConfig
from ..exceptions import FileAccessError, MalformedInputError
from ..file_ops import expand_paths, read_source
from ..logging_config import get_logger
from ..models import AnalysisRun, FileFailure, FileResult, StatementCounts
from ..scanning import ScopeTracker, tokenize
from .classifier import StatementClassifier

logger = get_logger(__name__)


def analyze_source(text: str) -> StatementCounts:
    """Count unsafe and total statements in Rust source text.

    Raises:
        MalformedInputError: On unbalanced delimiters or unterminated
            strings/comments
    """
    scoped = ScopeTracker().scan(tokenize(text))
    return StatementClassifier().classify(scoped)


class UnsafeRatioAnalyzer:
    """Analyze Rust files and aggregate their unsafe statement ratios."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

    def analyze_file(self, path: Path) -> FileResult:
        """
        Scan one file.

        Raises:
            FileAccessError: If the file cannot be read
            MalformedInputError: If the file cannot be segmented
        """
        source = read_source(path, max_size_bytes=self.config.max_file_size_bytes)
        try:
            counts = analyze_source(source)
        except MalformedInputError as e:
            raise e.with_path(path) from e
        logger.debug(f"{path}: {counts.unsafe_count}/{counts.total_count}")
        return FileResult.from_counts(str(path), counts)

    def analyze(self, paths: Iterable[Union[str, Path]]) -> AnalysisRun:
        """
        Scan every path (directories are expanded into source files).

        Failures are recorded per file and never abort the run. Results keep
        input order whether or not threads are used.
        """
        files = expand_paths(
            [Path(p) for p in paths], self.config.extensions, self.config.exclude_dirs
        )

        if self.config.workers > 1 and len(files) >= self.config.parallel_threshold:
            logger.debug(f"Scanning {len(files)} files with {self.config.workers} workers")
            with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                outcomes = list(executor.map(self._analyze_one, files))
        else:
            outcomes = [self._analyze_one(f) for f in files]

        run = AnalysisRun()
        for outcome in outcomes:
            if isinstance(outcome, FileFailure):
                run.failures.append(outcome)
            else:
                run.results.append(outcome)

        logger.info(
            f"Scan complete: {len(run.results)} analyzed, {len(run.failures)} errors"
        )
        return run

    def _analyze_one(self, path: Path) -> Union[FileResult, FileFailure]:
        try:
            return self.analyze_file(path)
        except FileAccessError as e:
            logger.info(f"Access error for {path}: {e.reason}")
            return FileFailure(str(path), e)
        except MalformedInputError as e:
            where = f" at {e.location}" if e.location else ""
            logger.info(f"Parse error for {path}{where}: {e.reason}")
            return FileFailure(str(path), e)

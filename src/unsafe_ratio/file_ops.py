"""
File operations for unsafe-ratio.

Size-limited source reading and directory expansion.
"""

import os
from collections.abc import Generator, Iterable
from pathlib import Path
from typing import Optional

from .exceptions import FileAccessError
from .logging_config import get_logger

logger = get_logger(__name__)


def read_source(
    filepath: Path,
    max_size_bytes: Optional[int] = None,
    encoding: str = "utf-8",
) -> str:
    """
    Read a source file fully, enforcing an optional size limit.

    Args:
        filepath: File to read
        max_size_bytes: Reject files larger than this (None disables the check)
        encoding: Text encoding

    Returns:
        File contents as string

    Raises:
        FileAccessError: If the file is missing, unreadable, too large or not valid text
    """
    if not filepath.exists():
        raise FileAccessError(filepath, "No such file")
    if filepath.is_dir():
        raise FileAccessError(filepath, "Is a directory")

    if max_size_bytes is not None:
        try:
            size = filepath.stat().st_size
        except OSError as e:
            raise FileAccessError(filepath, f"Cannot stat file: {e}")
        if size > max_size_bytes:
            raise FileAccessError(
                filepath, f"File size {size} bytes exceeds limit of {max_size_bytes} bytes"
            )

    try:
        with open(filepath, encoding=encoding) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"Encoding error: {e}")
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def iter_source_files(
    root_dir: Path,
    extensions: Iterable[str],
    exclude_dirs: Iterable[str] = (),
) -> Generator[Path, None, None]:
    """
    Walk a directory and yield matching source files in sorted order.

    Hidden directories and directories named in ``exclude_dirs`` are pruned.

    Args:
        root_dir: Directory to scan
        extensions: File suffixes to include (e.g. [".rs"])
        exclude_dirs: Directory names to skip

    Yields:
        Paths of matching files
    """
    ext_set = set(extensions)
    excluded = set(exclude_dirs)

    for dirpath, dirnames, filenames in os.walk(root_dir):
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and d not in excluded
        )
        for filename in sorted(filenames):
            if Path(filename).suffix in ext_set:
                yield Path(dirpath) / filename


def expand_paths(
    paths: Iterable[Path],
    extensions: Iterable[str],
    exclude_dirs: Iterable[str] = (),
) -> list[Path]:
    """
    Expand directories into their source files; keep file paths as given.

    Paths that do not exist are passed through unchanged so that reading them
    later reports a per-file error.
    """
    extensions = list(extensions)
    exclude_dirs = list(exclude_dirs)
    expanded: list[Path] = []
    for path in paths:
        if path.is_dir():
            found = list(iter_source_files(path, extensions, exclude_dirs))
            logger.debug(f"Expanded {path} into {len(found)} files")
            expanded.extend(found)
        else:
            expanded.append(path)
    return expanded

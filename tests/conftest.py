"""Shared test fixtures for unsafe-ratio tests."""

import logging

import pytest


@pytest.fixture
def write_rust(tmp_path):
    """Factory fixture: write Rust source under tmp_path and return its path."""

    def _write(name: str, source: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI runs install handlers with force=True; drop them after each test."""
    yield
    logging.getLogger().handlers.clear()
    logging.getLogger("unsafe_ratio").setLevel(logging.NOTSET)

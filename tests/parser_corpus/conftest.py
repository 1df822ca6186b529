"""Pytest configuration for parser corpus tests."""

from pathlib import Path

import pytest

# Corpus directories
CORPORA_DIR = Path(__file__).parent.parent / "corpora"
VALID_CORPUS_DIR = CORPORA_DIR / "valid"
INVALID_CORPUS_DIR = CORPORA_DIR / "invalid"


@pytest.fixture
def valid_corpus_dir() -> Path:
    """Return path to the well-formed corpus directory."""
    return VALID_CORPUS_DIR


@pytest.fixture
def invalid_corpus_dir() -> Path:
    """Return path to the malformed corpus directory."""
    return INVALID_CORPUS_DIR

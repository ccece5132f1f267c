"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from fieldmap import MetadataIndex


@pytest.fixture
def index():
    """Fresh MetadataIndex instance."""
    return MetadataIndex()

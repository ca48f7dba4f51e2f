"""Pytest configuration — adds src/ to sys.path and provides store fakes."""

import os
import sys

import pytest

# Add src/ to Python path so tests can import from folder_sheet
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tests.fakes import FakeFolderStore, FakeTabularStore  # noqa: E402


@pytest.fixture
def folder_store() -> FakeFolderStore:
    return FakeFolderStore()


@pytest.fixture
def tabular_store() -> FakeTabularStore:
    return FakeTabularStore()

"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass
from datetime import datetime

from graphcopy import CollectingSink


def identity(prop, value):
    return value


@pytest.fixture
def identity_transform():
    """Transform that returns every value unchanged."""
    return identity


@pytest.fixture
def sink():
    """Fresh in-memory diagnostics sink."""
    return CollectingSink()


@dataclass
class SimpleRecord:
    id: int
    name: str | None
    created: datetime


@dataclass
class NestedRecord:
    level: int
    inner: SimpleRecord | None = None
    numbers: list[int] | None = None


@pytest.fixture
def simple_record():
    return SimpleRecord(id=1, name="Test", created=datetime(2024, 1, 1))


@pytest.fixture
def nested_record(simple_record):
    return NestedRecord(level=1, inner=simple_record, numbers=[1, 2, 3])

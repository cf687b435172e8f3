"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def monster_records():
    """Record list with duplicate `data` keys and uneven fields."""
    return [
        {"data": 3, "name": "Goblin", "cnt": 2, "lvl": 1, "timer": 100},
        {"data": 1, "name": "Orc", "cnt": 1},
        {"data": 3, "name": "Goblin King", "cnt": 4, "lvl": 5, "timer": 40, "helper_recurrent": True},
        {"name": "Unkeyed"},
        {"data": "1", "cnt": 2, "extra": {"tier": 2}},
    ]


@pytest.fixture
def sample_document(monster_records):
    """Document mixing record lists, scalar lists and opaque values."""
    return {
        "tag": "clan-42",
        "timestamp": 1700000000,
        "troops": monster_records,
        "spells": [{"data": 7, "lvl": 2}, {"data": 7, "lvl": 4}],
        "achievements": ["first", "second", 3, None],
        "settings": {"theme": "dark"},
        "notes": [{"text": "no keys here"}, {"text": "still none"}],
    }

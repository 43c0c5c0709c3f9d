"""Shared fixtures: small in-memory content, a memory store and a fixed clock."""

import copy

import pytest

from bonus_rush.game import FixedClock, GameService, MemoryStore, ProgressStore
from bonus_rush.puzzle import load_content, parse_content


SMALL_CONTENT = {
    "puzzles": [
        {
            "id": 1,
            "title": "Barn",
            "wheel_letters": "RNAB",
            "tiers": {
                "Bronze": {
                    "grid": ["BAR", "A##", "N##"],
                    "crossword_words": ["BAR", "BAN"],
                    "allowed_words": ["BAR", "BAN", "BRA", "NAB"],
                },
                "Silver": {
                    "grid": ["BARN", "R#A#", "A#N#"],
                    "crossword_words": ["BARN", "BRA", "RAN"],
                    "allowed_words": ["BARN", "BRA", "RAN", "BAN", "BAR"],
                },
            },
        },
        {
            "id": 2,
            "title": "Saved",
            "wheel_letters": "SAVED",
            "tiers": {
                "Bronze": {
                    "grid": ["SAD", "E##", "A##"],
                    "crossword_words": ["SAD", "SEA"],
                    "allowed_words": ["SAD", "SEA", "ADS", "VASE"],
                },
            },
        },
    ],
    "ladder": {
        "week_starts_on": "2026-01-26",
        "unlocks": [
            {"puzzle_id": 1, "unlock_date": "2026-01-26"},
            {"puzzle_id": 2, "unlock_date": "2026-02-09", "label": "Coming Soon"},
        ],
    },
}


@pytest.fixture
def small_content_data():
    return copy.deepcopy(SMALL_CONTENT)


@pytest.fixture
def small_content(small_content_data):
    return parse_content(small_content_data)


@pytest.fixture
def bundled_content():
    return load_content()


@pytest.fixture
def clock():
    """Monday 2026-01-26 09:00 UTC, the day the first puzzle opens."""
    return FixedClock()


@pytest.fixture
def kv():
    return MemoryStore()


@pytest.fixture
def store(kv):
    return ProgressStore(kv)


@pytest.fixture
def service(small_content, kv, clock):
    return GameService(small_content, kv, clock=clock)

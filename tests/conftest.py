"""
Pytest configuration and shared fixtures for turnkeep tests.
"""

import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from turnkeep.core.engine import GameEngine
from turnkeep.core.viewport import Viewport
from turnkeep.data.loader import DATA_LOADER
from turnkeep.entities.factory import EntityFactory
from turnkeep.world.loader import parse_level


ARENA = [
    "#########",
    "#@......#",
    "#.......#",
    "#.....R.#",
    "#########",
]

DOOR_CORRIDOR = [
    "#######",
    "#@|.#.#",
    "#######",
]


@pytest.fixture
def data_loader():
    """Get the shared DATA_LOADER instance."""
    return DATA_LOADER


@pytest.fixture
def entity_factory(data_loader):
    """Create an EntityFactory reading the bundled archetypes."""
    return EntityFactory(data_loader)


@pytest.fixture
def make_level():
    """Build a level from a list of map rows."""

    def _make(rows):
        return parse_level(list(rows))

    return _make


@pytest.fixture
def arena(make_level):
    """A walled room with the player at (1, 1) and a rat at (6, 3)."""
    return make_level(ARENA)


@pytest.fixture
def door_level(make_level):
    """Player at (1, 1) with a closed door directly to the east."""
    return make_level(DOOR_CORRIDOR)


@pytest.fixture
def make_engine():
    """Build an engine around a level with a 1-pixel-per-tile viewport."""

    def _make(level, views=1, **kwargs):
        kwargs.setdefault("viewport", Viewport(0, 0, 1))
        return GameEngine(level, views, **kwargs)

    return _make

"""
Level loading from plain-text and TOML map files.

Plain text: one row per line. TOML: a list of [[maps]] tables, each with a
name and a multi-line layout string using the same alphabet.
"""

import logging
from pathlib import Path
from typing import List, Optional

import toml

from turnkeep.config import CONFIG
from turnkeep.data.loader import DATA_LOADER, DataLoader
from turnkeep.entities.components import Position
from turnkeep.entities.factory import EntityFactory
from turnkeep.world.level import Level
from turnkeep.world.map import TILE_FLOOR, GameMap, load_tile_definitions, symbol_table

logger = logging.getLogger(__name__)


class LevelFormatError(ValueError):
    """A level file contains a character outside the tile alphabet."""

    def __init__(self, message: str, row: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.row = row
        self.column = column


def parse_level(
    rows: List[str],
    data_loader: DataLoader = DATA_LOADER,
    event_log_size: Optional[int] = None,
) -> Level:
    """Build a level from rows of map text."""
    tiles = symbol_table(data_loader)
    player_symbol = data_loader.get_player_data()["symbol"]
    monster_symbols = data_loader.monster_symbols()
    factory = EntityFactory(data_loader)

    width = max((len(row) for row in rows), default=0)
    game_map = GameMap(width, len(rows), load_tile_definitions(data_loader))
    player = None
    monsters = []

    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            pos = Position(x, y)
            if char in tiles:
                game_map.set_tile(pos, tiles[char])
            elif char == player_symbol:
                if player is not None:
                    raise LevelFormatError(
                        f"Second player start in map at position [{y + 1},{x + 1}]",
                        row=y + 1,
                        column=x + 1,
                    )
                player = factory.create_player(x, y)
                game_map.set_tile(pos, TILE_FLOOR)
            elif char in monster_symbols:
                monsters.append(factory.create_monster_for_symbol(x, y, char))
                game_map.set_tile(pos, TILE_FLOOR)
            else:
                raise LevelFormatError(
                    f"Invalid character {char!r} in map at position [{y + 1},{x + 1}]",
                    row=y + 1,
                    column=x + 1,
                )

    if player is None:
        raise LevelFormatError(f"Map has no player start ({player_symbol!r})")

    if event_log_size is None:
        event_log_size = CONFIG.event_log_size
    return Level(game_map, player, monsters, event_log_size=event_log_size)


def _read_toml_layout(path: Path, name: Optional[str]) -> List[str]:
    with open(path, "r", encoding="utf-8") as f:
        data = toml.load(f)

    maps = data.get("maps", [])
    if not maps:
        raise LevelFormatError(f"No maps found in {path}")

    if name is None:
        m_data = maps[0]
    else:
        matches = [m for m in maps if m.get("name") == name]
        if not matches:
            raise LevelFormatError(f"No map named {name!r} in {path}")
        m_data = matches[0]

    return m_data["layout"].strip("\n").split("\n")


def load_level(
    path,
    name: Optional[str] = None,
    data_loader: DataLoader = DATA_LOADER,
    event_log_size: Optional[int] = None,
) -> Level:
    """Load a level from a .txt or .toml file."""
    path = Path(path)
    if path.suffix == ".toml":
        rows = _read_toml_layout(path, name)
    else:
        with open(path, "r", encoding="utf-8") as f:
            rows = f.read().splitlines()

    level = parse_level(rows, data_loader, event_log_size)
    logger.info(
        "Loaded level %s (%dx%d, %d monsters)",
        path.name, level.game_map.width, level.game_map.height, len(level.monsters),
    )
    return level

"""
Static data loading for tile definitions and actor archetypes.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional

STATIC_DIR = Path(__file__).parent / "static"


class DataLoader:
    """Handles loading game data from the static data directory."""

    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = Path(data_dir) if data_dir else STATIC_DIR
        self._cache: Dict[str, Any] = {}

    def load_json(self, filename: str) -> Dict[str, Any]:
        """Load data from a JSON file."""
        if filename in self._cache:
            return self._cache[filename]

        filepath = self.data_dir / f"{filename}.json"
        if not filepath.exists():
            raise FileNotFoundError(f"Data file not found: {filepath}")

        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        self._cache[filename] = data
        return data

    def get_tile_data(self, tile_id: str) -> Optional[Dict[str, Any]]:
        """Get data for a specific tile type."""
        return self.load_json("tiles").get(tile_id)

    def get_player_data(self) -> Dict[str, Any]:
        """Get the player's starting stats."""
        return self.load_json("actors")["player"]

    def get_monster_data(self, monster_id: str) -> Optional[Dict[str, Any]]:
        """Get data for a specific monster archetype."""
        return self.load_json("actors").get("monsters", {}).get(monster_id)

    def monster_symbols(self) -> Dict[str, str]:
        """Map each monster start symbol to its archetype id."""
        monsters = self.load_json("actors").get("monsters", {})
        return {data["symbol"]: monster_id for monster_id, data in monsters.items()}


# Global data loader instance
DATA_LOADER = DataLoader()

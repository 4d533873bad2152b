"""
Configuration settings for the simulation core.
"""

import logging
import os
from typing import Dict, Any, Optional

import toml
from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)


class GameConfig(BaseModel):
    """Configuration settings for the game."""

    # Game Metadata
    game_title: str = "Turnkeep"
    version: str = "0.1.0"

    # Presentation boundary
    tile_pixel_size: int = 32  # Pixels per tile for screen-to-grid conversion

    # Level settings
    default_level: Optional[str] = None  # None means the bundled level1.txt

    # Views
    num_views: int = 1
    publish_timeout: Optional[float] = None  # Seconds; None blocks forever

    # Turn log
    event_log_size: int = 50

    log_level: str = "INFO"

    # Controls
    controls: Dict[str, Any] = {}

    model_config = ConfigDict(extra="allow")

    @classmethod
    def load_from_toml(cls, path: str = "config.toml") -> "GameConfig":
        """Load configuration from a TOML file."""
        if not os.path.exists(path):
            logger.warning("Config file %s not found. Using defaults.", path)
            return cls()

        try:
            with open(path, "r") as f:
                data = toml.load(f)

            # Flatten game settings for Pydantic
            config = cls(**data.get("game", {}))
            config.controls = data.get("controls", {})
            return config
        except (toml.TomlDecodeError, ValidationError) as e:
            logger.error("Error loading config %s: %s", path, e)
            return cls()


# Global config instance
CONFIG = GameConfig.load_from_toml()

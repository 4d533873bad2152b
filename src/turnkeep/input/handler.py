"""
Abstract input events and a terminal key reader that produces them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Tuple
import sys
import termios

from turnkeep.config import CONFIG

if TYPE_CHECKING:
    from turnkeep.core.channels import ViewChannel


class InputType(Enum):
    NONE = "none"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SEARCH = "search"
    QUIT = "quit"
    CLOSE_VIEW = "close_view"


MOVE_DELTAS: Dict[InputType, Tuple[int, int]] = {
    InputType.MOVE_UP: (0, -1),
    InputType.MOVE_DOWN: (0, 1),
    InputType.MOVE_LEFT: (-1, 0),
    InputType.MOVE_RIGHT: (1, 0),
}

DEFAULT_KEYS = {
    "w": "move_up",
    "k": "move_up",
    "s": "move_down",
    "j": "move_down",
    "a": "move_left",
    "h": "move_left",
    "d": "move_right",
    "l": "move_right",
    "q": "quit",
    "x": "close_view",
}


@dataclass
class InputEvent:
    """One input for the engine.

    `point` is a screen-space pixel position for SEARCH; `channel` names the
    view being closed for CLOSE_VIEW.
    """

    type: InputType = InputType.NONE
    point: Optional[Tuple[int, int]] = None
    channel: Optional["ViewChannel"] = None

    @classmethod
    def search(cls, x: int, y: int) -> "InputEvent":
        return cls(InputType.SEARCH, point=(x, y))

    @classmethod
    def close_view(cls, channel: "ViewChannel") -> "InputEvent":
        return cls(InputType.CLOSE_VIEW, channel=channel)


class InputHandler:
    """Reads single keys from the terminal and maps them to InputEvents."""

    def __init__(self, key_map: Optional[Dict[str, str]] = None):
        if sys.stdin.isatty():
            self.stdin_fd = sys.stdin.fileno()
            self.old_settings = termios.tcgetattr(self.stdin_fd)
            self.is_tty = True
        else:
            self.stdin_fd = None
            self.old_settings = None
            self.is_tty = False

        if key_map is None:
            key_map = CONFIG.controls.get("keys") or DEFAULT_KEYS
        self.key_map = {key: InputType(action) for key, action in key_map.items()}

    def setup_terminal(self):
        """Setup terminal for raw input."""
        if not self.is_tty:
            return
        new_settings = termios.tcgetattr(self.stdin_fd)
        new_settings[3] = new_settings[3] & ~(termios.ECHO | termios.ICANON)
        termios.tcsetattr(self.stdin_fd, termios.TCSADRAIN, new_settings)

    def restore_terminal(self):
        """Restore terminal to original settings."""
        if not self.is_tty:
            return
        termios.tcsetattr(self.stdin_fd, termios.TCSADRAIN, self.old_settings)

    def map_key(self, key: str) -> InputEvent:
        """Map a raw key to an InputEvent. Unknown keys become NONE."""
        return InputEvent(self.key_map.get(key, InputType.NONE))

    def get_input_blocking(self) -> InputEvent:
        """Get input blocking until a key is pressed. EOF maps to QUIT."""
        key = sys.stdin.read(1)
        if not key:
            return InputEvent(InputType.QUIT)
        return self.map_key(key)

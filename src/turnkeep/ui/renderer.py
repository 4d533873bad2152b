"""
Terminal view of level snapshots using rich.
"""

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from turnkeep.core.channels import ViewChannel
from turnkeep.entities.components import Position
from turnkeep.world.level import LevelSnapshot

PLAYER_STYLE = "bold yellow"
MONSTER_STYLE = "bold red"
BLOOD_STYLE = "red"
DEBUG_STYLE = "on grey23"


class Renderer:
    """Renders snapshots to the terminal using rich."""

    def __init__(self, console: Console, show_debug: bool = True, log_lines: int = 5):
        self.console = console
        self.show_debug = show_debug
        self.log_lines = log_lines

    def render_map(self, snapshot: LevelSnapshot) -> Text:
        text = Text()
        for y in range(snapshot.height):
            for x in range(snapshot.width):
                pos = Position(x, y)
                style = ""
                if pos == snapshot.player.pos:
                    style = PLAYER_STYLE
                elif pos in snapshot.monsters:
                    style = MONSTER_STYLE
                elif snapshot.blood[y, x]:
                    style = BLOOD_STYLE
                if self.show_debug and pos in snapshot.debug:
                    style = f"{style} {DEBUG_STYLE}".strip()
                text.append(snapshot.char_at(pos), style=style or None)
            text.append("\n")
        return text

    def render_status(self, snapshot: LevelSnapshot) -> Text:
        player = snapshot.player
        status = Text(f"Turn {snapshot.turn}  HP {player.hitpoints}")
        if not player.alive:
            status.append("  DEAD", style="bold red")
        for line in snapshot.events[-self.log_lines:]:
            status.append(f"\n{line}")
        return status

    def render(self, snapshot: LevelSnapshot):
        self.console.clear()
        self.console.print(
            Panel(Group(self.render_map(snapshot), self.render_status(snapshot)))
        )


class TerminalView:
    """Consumes snapshots from one channel and draws each of them."""

    def __init__(self, channel: ViewChannel, renderer: Renderer):
        self.channel = channel
        self.renderer = renderer
        self.frames = 0

    def run(self):
        """Draw until the engine closes the channel."""
        for snapshot in self.channel:
            self.renderer.render(snapshot)
            self.frames += 1

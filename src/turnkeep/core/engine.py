"""
Turn engine: consumes one input at a time, advances the level and publishes
the result to every registered view.
"""

import logging
import queue
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from turnkeep.config import CONFIG
from turnkeep.core.channels import ViewChannel
from turnkeep.core.viewport import Viewport, screen_to_grid
from turnkeep.entities.ai_system import AISystem
from turnkeep.entities.combat import attack
from turnkeep.input.handler import MOVE_DELTAS, InputEvent, InputType
from turnkeep.world.level import Level
from turnkeep.world.loader import load_level
from turnkeep.world.map import TILE_CLOSED_DOOR, TILE_FLOOR

logger = logging.getLogger(__name__)


class TurnState(Enum):
    """Possible states of the turn loop."""

    AWAITING_INPUT = "awaiting_input"
    PROCESSING = "processing"
    BROADCASTING = "broadcasting"
    TERMINATED = "terminated"


class GameEngine:
    """Owns the level and is the only code that mutates it.

    `run()` is the blocking loop; `process()` handles a single input and is
    what the loop calls for every event it takes off the input queue.
    """

    def __init__(
        self,
        level: Level,
        views: Union[int, Iterable[ViewChannel]] = 1,
        viewport: Optional[Viewport] = None,
        publish_timeout: Optional[float] = CONFIG.publish_timeout,
    ):
        self.level = level
        if isinstance(views, int):
            views = [ViewChannel() for _ in range(views)]
        self.views: List[ViewChannel] = list(views)
        self.input_queue: "queue.Queue[InputEvent]" = queue.Queue()
        self.viewport = viewport or Viewport()
        self.publish_timeout = publish_timeout
        self.ai_system = AISystem()
        self.state = TurnState.AWAITING_INPUT

    @classmethod
    def from_file(cls, path, num_views: int = CONFIG.num_views, **kwargs) -> "GameEngine":
        return cls(load_level(path), num_views, **kwargs)

    @property
    def running(self) -> bool:
        return self.state is not TurnState.TERMINATED

    def submit(self, event: InputEvent) -> bool:
        """Queue an input for the loop. Returns False once terminated."""
        if not self.running:
            logger.debug("Dropping %s: engine has terminated", event.type.name)
            return False
        self.input_queue.put(event)
        return True

    def run(self):
        """Run the turn loop until quit or until every view has closed."""
        logger.info("Turn loop started with %d view(s)", len(self.views))
        # Every view gets the starting state before the first input
        self.broadcast()

        try:
            while self.running:
                event = self.input_queue.get()
                if self.process(event):
                    self.broadcast()
        finally:
            self.shutdown()

    def process(self, event: InputEvent) -> bool:
        """Apply one input. Returns True if the result should be broadcast."""
        if not self.running:
            raise RuntimeError("Engine has terminated")

        self.state = TurnState.PROCESSING

        if event.type is InputType.QUIT:
            logger.info("Quit requested")
            self.state = TurnState.TERMINATED
            return False

        if event.type is InputType.NONE:
            self.state = TurnState.AWAITING_INPUT
            return False

        self.handle_input(event)
        if not self.running:
            return False

        self.ai_system.update(self.level)
        self.level.turn += 1
        self.state = TurnState.BROADCASTING
        return True

    def handle_input(self, event: InputEvent):
        """Mutate the level for a single non-trivial input."""
        if event.type in MOVE_DELTAS:
            self.move_player(*MOVE_DELTAS[event.type])
        elif event.type is InputType.SEARCH:
            self.search(event.point)
        elif event.type is InputType.CLOSE_VIEW:
            self.close_view(event.channel)

    def move_player(self, dx: int, dy: int):
        """Step, attack, or open a door in the given direction."""
        level = self.level
        player = level.player
        if not player.alive:
            return

        target = player.pos.offset(dx, dy)
        monster = level.monster_at(target)
        if monster is not None:
            level.add_events(*attack(player, monster))
        elif level.game_map.is_passable(target):
            player.actor.pos = target
        elif level.game_map.open_door_at(target):
            level.add_events("You open the door.")

    def search(self, point: Optional[Tuple[int, int]]):
        """Preview a path to a floor tile under the pointer, or open a door."""
        if point is None:
            return

        pos = screen_to_grid(point, self.viewport)
        game_map = self.level.game_map
        if not game_map.in_bounds(pos):
            logger.debug("Search outside the map at (%d, %d)", pos.x, pos.y)
            return

        tile = game_map.tile_at(pos)
        if tile == TILE_FLOOR:
            result = self.level.find_path(self.level.player.pos, pos)
            logger.debug(
                "Path to (%d, %d): found=%s, %d steps, %d tiles explored",
                pos.x, pos.y, result.found, len(result.path), len(result.visited),
            )
        elif tile == TILE_CLOSED_DOOR:
            game_map.open_door_at(pos)

    def close_view(self, channel: Optional[ViewChannel]):
        """Deregister a view. The loop ends when the last one goes."""
        if not any(view is channel for view in self.views):
            logger.warning("Close requested for unknown view %r", channel)
            return
        self._drop_view(channel)

    def _drop_view(self, channel: ViewChannel):
        channel.close()
        self.views = [view for view in self.views if view is not channel]
        logger.info("%s closed, %d view(s) left", channel.name, len(self.views))
        if not self.views:
            self.state = TurnState.TERMINATED

    def broadcast(self):
        """Publish the current level to every registered view."""
        self.state = TurnState.BROADCASTING
        snapshot = self.level.snapshot()

        for channel in list(self.views):
            try:
                channel.publish(snapshot, timeout=self.publish_timeout)
            except queue.Full:
                logger.warning(
                    "%s did not take a snapshot within %ss, dropping it",
                    channel.name, self.publish_timeout,
                )
                self._drop_view(channel)

        if self.running:
            self.state = TurnState.AWAITING_INPUT

    def shutdown(self):
        """Terminate and close every remaining view."""
        self.state = TurnState.TERMINATED
        for channel in self.views:
            channel.close()
        self.views = []
        logger.info("Turn loop stopped")

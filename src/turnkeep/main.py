"""
Terminal entry point: one turn loop, N rich views and a keyboard reader.
"""

import argparse
import logging
import sys
import threading
import traceback

from rich.console import Console
from rich.logging import RichHandler

from turnkeep.config import CONFIG, GameConfig
from turnkeep.core.engine import GameEngine
from turnkeep.data.loader import STATIC_DIR
from turnkeep.input.handler import InputHandler, InputType
from turnkeep.ui.renderer import Renderer, TerminalView

logger = logging.getLogger("turnkeep")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the turn engine in a terminal.")
    parser.add_argument("--level", help="Path to a .txt or .toml level file")
    parser.add_argument("--views", type=int, help="Number of views to open")
    parser.add_argument("--config", help="Path to a config.toml to use instead of ./config.toml")
    return parser.parse_args(argv)


def start_views(engine: GameEngine) -> list:
    """Start a rendering thread per view. Only the first one draws to the terminal."""
    threads = []
    for index, channel in enumerate(engine.views):
        console = Console(quiet=index > 0)
        view = TerminalView(channel, Renderer(console))
        thread = threading.Thread(target=view.run, name=channel.name, daemon=True)
        thread.start()
        threads.append(thread)
    return threads


def read_input(engine: GameEngine, input_handler: InputHandler):
    """Feed keys to the engine until it stops."""
    while engine.running:
        event = input_handler.get_input_blocking()
        if event.type is InputType.CLOSE_VIEW:
            # The engine thread swaps the list on removal, never edits it in place
            views = engine.views
            if not views:
                break
            event.channel = views[-1]
            last_view = len(views) == 1
        else:
            last_view = False
        if not engine.submit(event):
            break
        if event.type is InputType.QUIT or last_view:
            break


def main(argv=None):
    """Entry point for the game."""
    args = parse_args(argv)
    config = GameConfig.load_from_toml(args.config) if args.config else CONFIG

    logging.basicConfig(
        level=config.log_level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )

    level_path = args.level or config.default_level or STATIC_DIR / "level1.txt"
    num_views = args.views or config.num_views
    input_handler = InputHandler(config.controls.get("keys"))

    try:
        engine = GameEngine.from_file(
            level_path, num_views, publish_timeout=config.publish_timeout
        )
        start_views(engine)
        engine_thread = threading.Thread(target=engine.run, name="turn-loop", daemon=True)
        engine_thread.start()

        input_handler.setup_terminal()
        try:
            read_input(engine, input_handler)
        finally:
            input_handler.restore_terminal()
        engine_thread.join()
    except KeyboardInterrupt:
        logger.info("Game interrupted by user.")
        sys.exit(0)
    except Exception as e:
        with open("game_debug.log", "w") as f:
            f.write(f"CRASH REPORT:\n{str(e)}\n\n{traceback.format_exc()}")
        logger.exception("An error occurred, see game_debug.log for details")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Mini Racer — entry point.

Loads the game configuration, creates the arcade window, and launches
the main game view. Run this file to play:

    python main.py
    python main.py --config configs/default.yaml --log-level DEBUG
"""

import argparse
import logging

import arcade

from racer.config import DEFAULT_CONFIG_PATH, load_config
from racer.renderer import RacerView


def main() -> None:
    """Load config, create the window, and start the game."""
    parser = argparse.ArgumentParser(description="Mini Racer")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Path to a YAML config file")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    screen_cfg = config["screen"]

    window = arcade.Window(
        width=screen_cfg["width"],
        height=screen_cfg["height"],
        title=screen_cfg["title"],
        update_rate=1 / screen_cfg["fps"],
    )

    view = RacerView(config)
    view.setup()
    window.show_view(view)

    arcade.run()


if __name__ == "__main__":
    main()

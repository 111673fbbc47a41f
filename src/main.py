"""
Main entry point for Glyph Recall.

Usage:
    python -m src.main
    python -m src.main config.yaml --difficulty hard
    python -m src.main --difficulty 0 --log-file recall.log --verbose
"""

import argparse
import curses
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .engine import GameConfig, RoundResult
from .terminal import CursesScreen, GameApp, MenuState


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """Load game configuration from a YAML file, or the defaults."""
    if config_path is None:
        return GameConfig()

    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return GameConfig(**(data or {}))


def configure_logging(log_file: Optional[str], verbose: bool) -> None:
    """Send log records to a file; the terminal belongs to the game."""
    if log_file is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return

    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )


def play(menu: MenuState) -> List[RoundResult]:
    """Run the game on the real terminal and return the round results."""
    def _run(stdscr) -> List[RoundResult]:
        app = GameApp(CursesScreen(stdscr), menu)
        return app.run()

    return curses.wrapper(_run)


def print_summary(results: List[RoundResult]) -> None:
    print("=== Session Summary ===")
    print(f"Rounds played: {len(results)}")
    if not results:
        return

    wins = sum(1 for r in results if r.state == "victory")
    print(f"Victories: {wins}")
    print(f"Best score: {max(r.score for r in results)}")
    for number, result in enumerate(results, 1):
        print(
            f"  {number:>3}. {result.difficulty:<10} {result.state:<9} "
            f"score {result.score:>4}  invalid presses {result.invalid_key_presses}"
        )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Memorise the board, then type the characters as they disappear",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  default_difficulty: custom
  difficulties:
    - name: custom
      rows: 4
      columns: 4
      start_delay: 2.0
      hide_interval: 1.0
      correct_guess_points: 5
      invalid_key_press_penalty: 3
      pools:
        - from: "a"
          to: "z"
        - "0123456789"
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (built-in difficulties if omitted)"
    )
    parser.add_argument(
        "--difficulty", "-d",
        help="Preselected difficulty, by name or 0-based index"
    )
    parser.add_argument(
        "--log-file",
        help="Write log records to this file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug details (needs --log-file)"
    )

    args = parser.parse_args(argv)

    configure_logging(args.log_file, args.verbose)

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    menu = MenuState.from_config(config)
    if args.difficulty is not None:
        difficulty = config.find(args.difficulty)
        if difficulty is None:
            names = ", ".join(d.name for d in config.difficulties)
            print(f"Error: unknown difficulty {args.difficulty!r} (choose from {names})", file=sys.stderr)
            return 1
        menu.selected = config.index_of(difficulty.name)

    try:
        results = play(menu)
    except KeyboardInterrupt:
        # GameApp.run returns its results on interrupt; this only catches
        # one raised while curses is still being set up
        results = []

    print_summary(results)
    return 0


if __name__ == "__main__":
    sys.exit(main())

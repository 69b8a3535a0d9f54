from __future__ import annotations

import argparse
import logging

from mazerun.app_config import LEVELS
from mazerun.state import Leaderboard


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="mazerun", description="MAZERUN app runner (IRUN monorepo)")
    parser.add_argument(
        "--smoke",
        action="store_true",
        help="Run briefly and exit (for quick verification).",
    )
    parser.add_argument(
        "--third-person",
        action="store_true",
        help="Start with the chase camera (V toggles in game).",
    )
    parser.add_argument(
        "--print-leaderboard",
        action="store_true",
        help="Print the local best times and exit.",
    )
    parser.add_argument(
        "--clear-leaderboard",
        action="store_true",
        help="Delete all recorded times and exit.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output (state transitions, level loads).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    if args.clear_leaderboard or args.print_leaderboard:
        board = Leaderboard()
        if args.clear_leaderboard:
            board.clear()
        print(board.format_listing([lvl.name for lvl in LEVELS]))
        return

    # Panda3D is only imported for actual game runs.
    from mazerun.game.app import run

    run(smoke=args.smoke, third_person=args.third_person)


if __name__ == "__main__":
    main()

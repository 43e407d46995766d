"""
Command line entry point

    python -m space_shooter                 # play in an Arcade window
    python -m space_shooter --episode       # headless random-policy episode
"""

import argparse
import logging

from .config import FRAME_RATE


def main():
    parser = argparse.ArgumentParser(description="Space shooter")
    parser.add_argument("--episode", action="store_true",
                        help="Run a headless random episode instead of opening a window")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fixed-step", action="store_true",
                        help=f"Step at a fixed {FRAME_RATE} Hz regardless of display refresh")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.episode:
        from .env import run_random_episode
        run_random_episode(render=False, seed=args.seed)
        return

    from .window import run_window
    run_window(seed=args.seed, fixed_step_ms=1000 / FRAME_RATE if args.fixed_step else None)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Entry point for the evolution clicker."""

from __future__ import annotations

import argparse

import pygame

from assets import DEFAULT_ASSET_DIR, AssetError
from game import Game
from transition import TransitionTimings


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evolution clicker")
    parser.add_argument(
        "--assets",
        default=str(DEFAULT_ASSET_DIR),
        help="Directory holding textures/ and sounds/.",
    )
    parser.add_argument(
        "--smoke",
        action="store_true",
        help="Run for a small number of frames and exit (test mode).",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=90,
        help="Frame budget for --smoke mode.",
    )
    parser.add_argument(
        "--autoplay",
        action="store_true",
        help="Automatically click the first available input (useful for smoke tests).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for cue selection.")
    parser.add_argument("--show-fps", action="store_true", help="Draw frame rate and window size.")
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Use short transition timings (pairs well with --smoke --autoplay).",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    pygame.init()
    pygame.display.set_caption("Evolution")

    timings = TransitionTimings(regular_s=0.4, egg_cracking_s=0.12) if args.fast else TransitionTimings()
    try:
        game = Game(
            asset_dir=args.assets,
            smoke=args.smoke,
            max_frames=max(1, args.frames),
            autoplay=args.autoplay,
            seed=args.seed,
            show_fps=args.show_fps,
            timings=timings,
        )
    except AssetError as exc:
        print(f"ERROR: {exc}")
        pygame.quit()
        return 1

    game.run()

    if pygame.mixer.get_init() is not None:
        pygame.mixer.quit()
    pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

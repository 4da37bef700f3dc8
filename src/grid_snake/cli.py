"""Command-line launcher for Grid Snake."""

from __future__ import annotations

import argparse
import logging
import sys

from grid_snake.config import ConfigurationError, GameConfig

logger = logging.getLogger(__name__)


def _add_game_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    parser.add_argument("--grid-width", type=int, default=None)
    parser.add_argument("--grid-height", type=int, default=None)
    parser.add_argument("--tick-interval", type=float, default=None)
    parser.add_argument("--initial-length", type=int, default=None)
    parser.add_argument("--growth", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake: play, simulate, and configure.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- play ---
    play_p = sub.add_parser("play", help="Play in a pygame window.")
    _add_game_flags(play_p)

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run headless games with random turns.",
    )
    _add_game_flags(sim_p)
    sim_p.add_argument("--games", type=int, default=100)
    sim_p.add_argument("--max-ticks", type=int, default=500)
    sim_p.add_argument("--turn-probability", type=float, default=0.2)
    sim_p.add_argument(
        "--show", action="store_true",
        help="Print the final board of the last game.",
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write the default config to a file.")
    cfg_p.add_argument("output", help="Destination JSON path.")

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    flag_map = {
        "grid_width": "grid_width",
        "grid_height": "grid_height",
        "tick_interval": "tick_interval",
        "initial_length": "initial_length",
        "growth": "growth_per_apple",
        "seed": "seed",
    }
    overrides = {
        cfg_name: getattr(args, cli_name)
        for cli_name, cfg_name in flag_map.items()
        if getattr(args, cli_name, None) is not None
    }
    return config.replace(**overrides) if overrides else config


def _run_play(args: argparse.Namespace) -> int:
    from grid_snake.engine import GameEngine
    from grid_snake.frontend import play

    score = play(GameEngine(_load_config(args)))
    print(f"Final count: {score}")  # noqa: T201
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    from grid_snake.benchmark import simulate

    config = _load_config(args)
    result = simulate(
        config=config,
        num_games=args.games,
        max_ticks=args.max_ticks,
        turn_probability=args.turn_probability,
        seed=config.seed,
    )
    print(result.summary())  # noqa: T201
    if args.show:
        print(result.final_board)  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "play": _run_play,
        "simulate": _run_simulate,
        "config": _run_config,
    }
    try:
        return handlers[args.command](args)
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())

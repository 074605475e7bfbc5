"""
Draughtsim CLI - Command-line interface for the engine.

Usage:
    draughtsim play [--red TYPE] [--blue TYPE]       Play in the terminal
    draughtsim simulate [--games N] [--json]         Run headless games

TYPE is one of: human, random, most-kills, simulated-random,
simulated-most-kills.
"""

import argparse
import asyncio
import logging
import random
import sys

from .bots.policy import CHOICES, ActorType
from .config import GameSettings
from .engine_core.errors import DraughtsimError
from .schemas import GameReport, MatchSummary


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Draughtsim - diagonal-capture board game with self-play AI",
        prog="draughtsim",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    _add_common_arguments(play_parser, red="human", blue="simulated-random")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run headless games")
    _add_common_arguments(simulate_parser, red="random", blue="random")
    simulate_parser.add_argument("--games", "-n", type=int, default=1, help="Number of games")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument("--json", action="store_true", help="Print a JSON summary")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        settings = GameSettings.from_env(
            width=args.width,
            height=args.height,
            max_moves=args.max_moves,
            max_concurrency=args.max_concurrency,
            log_level=args.log_level,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "play":
            asyncio.run(cmd_play(args, settings))
        elif args.command == "simulate":
            asyncio.run(cmd_simulate(args, settings))
    except (DraughtsimError, NotImplementedError) as e:
        print(f"Error: {e}")
        sys.exit(1)


def _add_common_arguments(parser, red, blue):
    parser.add_argument("--red", type=ActorType.parse, default=ActorType.parse(red),
                        help=f"Red policy ({', '.join(CHOICES)})")
    parser.add_argument("--blue", type=ActorType.parse, default=ActorType.parse(blue),
                        help=f"Blue policy ({', '.join(CHOICES)})")
    parser.add_argument("--width", type=int, default=None, help="Board width")
    parser.add_argument("--height", type=int, default=None, help="Board height")
    parser.add_argument("--max-moves", type=int, default=None, help="Stop games after this many moves")
    parser.add_argument("--max-concurrency", type=int, default=None,
                        help="Simultaneous simulations per fan-out")
    parser.add_argument("--log-level", default=None, help="Logging level")


async def cmd_play(args, settings):
    """Play one interactive game."""
    from .session import Game, console_session

    async with console_session(capacity=settings.input_buffer) as console:
        game = Game(
            settings.width,
            settings.height,
            console,
            settings=settings,
            exit_requested=console.exit_requested,
        )
        result = await game.play(args.red, args.blue)

    if result is None:
        print("Game cancelled")
    elif result.winner is None:
        print(f"No winner after {result.moves} moves")
    else:
        print(f"{result.winner.value.capitalize()} won after {result.moves} moves!")


async def cmd_simulate(args, settings):
    """Run headless games back to back."""
    from .session import Game

    rng = random.Random(args.seed)
    summary = MatchSummary(
        red=args.red.name,
        blue=args.blue.name,
        width=settings.width,
        height=settings.height,
    )

    for index in range(args.games):
        game = Game(settings.width, settings.height, None, settings=settings, rng=rng)
        result = await game.play(args.red, args.blue)
        report = GameReport(
            index=index,
            moves=result.moves,
            winner=result.winner.value if result.winner else None,
        )
        summary.add(report)
        if not args.json:
            print(f"Game {index + 1}: winner={report.winner} moves={report.moves}")

    if args.json:
        print(summary.model_dump_json(indent=2))
    else:
        print(f"\nRed wins: {summary.red_wins}")
        print(f"Blue wins: {summary.blue_wins}")
        if summary.undecided:
            print(f"Undecided: {summary.undecided}")
        print(f"Average moves: {summary.average_moves:.1f}")


if __name__ == "__main__":
    main()

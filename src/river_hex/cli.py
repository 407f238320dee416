"""river_hex.cli
===============
CLI for playing RiverHex in the terminal.

* ``--red`` / ``--blue`` choose ``human`` or ``computer`` for each side.
* ``--level`` sets the strength of every computer player.
* ``--load`` resumes a match saved with ``--save`` (the computer players
  continue exactly where they stopped).
* ``--games N`` with two computers plays N matches and prints a tally.
* Without any flag an *interactive wizard* asks for the options.
"""
from __future__ import annotations

import argparse
import random
import sys
from collections import Counter
from typing import Optional

from .agents.rule_based_helper import print_strategy_summary, reset_strategy_counts
from .hex_engine import hexPosition
from .hex_engine.board import HexState, Level, PlayerType
from .hex_engine.errors import PersistenceError

_PLAYER_TYPES = {"human": PlayerType.HUMAN, "computer": PlayerType.COMPUTER}
_LEVELS = {"easy": Level.EASY, "medium": Level.MEDIUM, "hard": Level.HARD}
_SIDES = {"red": HexState.RED, "blue": HexState.BLUE}

# ---------------------------------------------------------------------------
# Interactive helpers
# ---------------------------------------------------------------------------

def _prompt_choice(prompt: str, choices: list[str], default: Optional[str] = None) -> str:
    choice_str = "/".join(choices)
    while True:
        inp = input(f"{prompt} [{choice_str}] ").strip().lower()
        if not inp and default is not None:
            return default
        if inp in choices:
            return inp
        print(f"Please type one of: {choice_str}\n")


def _interactive_wizard(args: argparse.Namespace) -> argparse.Namespace:
    """Fill unspecified *args* fields by prompting the user."""
    if args.board_size is None:
        while True:
            try:
                size_str = input("Board size (2-26) [7] ").strip()
                args.board_size = int(size_str) if size_str else 7
                if 2 <= args.board_size <= 26:
                    break
            except ValueError:
                pass
            print("Please enter an integer between 2 and 26.\n")

    if args.red is None:
        args.red = _prompt_choice("Red player", list(_PLAYER_TYPES), default="human")
    if args.blue is None:
        args.blue = _prompt_choice("Blue player", list(_PLAYER_TYPES), default="computer")
    if args.level is None and "computer" in (args.red, args.blue):
        args.level = _prompt_choice("Computer level", list(_LEVELS), default="easy")
    if args.first is None:
        args.first = _prompt_choice("First to move", list(_SIDES), default="red")

    print()  # spacing before game starts
    return args


def _apply_defaults(args: argparse.Namespace) -> argparse.Namespace:
    if args.board_size is None:
        args.board_size = 7
    if args.red is None:
        args.red = "human"
    if args.blue is None:
        args.blue = "computer"
    if args.level is None:
        args.level = "easy"
    if args.first is None:
        args.first = "red"
    return args

# ---------------------------------------------------------------------------
# Game runner
# ---------------------------------------------------------------------------

def _new_game(args: argparse.Namespace, rng: random.Random) -> hexPosition:
    return hexPosition(
        args.board_size,
        _PLAYER_TYPES[args.red],
        _PLAYER_TYPES[args.blue],
        _LEVELS[args.level],
        _SIDES[args.first],
        rng=rng,
        print_debug=args.debug,
    )


def _run_series(args: argparse.Namespace, rng: random.Random) -> Counter:
    """Computer against computer, ``args.games`` times, quietly."""
    tally: Counter = Counter()
    reset_strategy_counts()
    for _ in range(args.games):
        game = _new_game(args, rng)
        tally[game.play(verbose=False)] += 1
    print(f"Red wins: {tally[HexState.RED]}  Blue wins: {tally[HexState.BLUE]}")
    print_strategy_summary()
    return tally


def _run_game(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)

    if args.games is not None:
        if args.red != "computer" or args.blue != "computer":
            raise SystemExit("--games needs --red computer --blue computer.")
        _run_series(args, rng)
        return

    if args.load:
        try:
            game = hexPosition.load(args.load, rng=rng, print_debug=args.debug)
        except (OSError, PersistenceError) as err:
            raise SystemExit(f"Cannot load {args.load}: {err}")
    else:
        game = _new_game(args, rng)

    try:
        game.play()
    except (KeyboardInterrupt, EOFError):
        print("\nGame interrupted by user.")
    finally:
        if args.save:
            game.save(args.save)
            print(f"Match saved to {args.save}")

# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="river-hex",
        description="Play RiverHex from the command line.",
    )
    parser.add_argument("--board-size", type=int,
                        help="Board side length (2-26, default 7)")
    parser.add_argument("--red", choices=list(_PLAYER_TYPES),
                        help="Who plays red, connecting left and right (default human)")
    parser.add_argument("--blue", choices=list(_PLAYER_TYPES),
                        help="Who plays blue, connecting top and bottom (default computer)")
    parser.add_argument("--level", choices=list(_LEVELS),
                        help="Computer strength (default easy)")
    parser.add_argument("--first", choices=list(_SIDES),
                        help="Side making the first move (default red)")
    parser.add_argument("--load", metavar="FILE",
                        help="Resume a saved match; size and player options are ignored")
    parser.add_argument("--save", metavar="FILE",
                        help="Save the match when it ends or is interrupted")
    parser.add_argument("--games", type=int,
                        help="Computer vs computer: play N matches and print a tally")
    parser.add_argument("--seed", type=int,
                        help="Seed for the computer players' random choices")
    parser.add_argument("--debug", action="store_true",
                        help="Print the computer players' reasoning")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="Prompt for options interactively (default when no flags are given)")
    return parser


def main(argv: Optional[list[str]] = None) -> None:  # noqa: D401 - simple name
    argv = sys.argv[1:] if argv is None else argv

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.games is not None and args.games < 1:
        parser.error("--games must be a positive number")

    need_interactive = args.interactive or len(argv) == 0
    if need_interactive and not args.load:
        args = _interactive_wizard(args)
    args = _apply_defaults(args)
    _run_game(args)

# Allow "python -m river_hex.cli" direct execution
if __name__ == "__main__":  # pragma: no cover
    main()

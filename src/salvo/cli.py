"""Command-line driver for a single-player game of salvo."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from salvo.config import MAX_GRID_SIZE, GameSettings
from salvo.engine.battlefield import Battlefield, CellState
from salvo.engine.errors import PlacementExhausted
from salvo.engine.game import Game
from salvo.engine.notation import number_to_letter
from salvo.telemetry import configure_console, init_telemetry

logger = logging.getLogger(__name__)

FLEET_RETRIES = 3

SYMBOLS = {
    CellState.UNTOUCHED: ".",
    CellState.MISS: "o",
    CellState.HIT_AFLOAT: "X",
    CellState.HIT_SUNK: "#",
}


def format_battlefield(battlefield: Battlefield, reveal: bool = False) -> str:
    """Render the grid with column letters across the top and row numbers down the side."""
    width = len(str(battlefield.size))
    header = " " * (width + 2) + " ".join(
        f"{number_to_letter(x):>2}" for x in range(battlefield.size)
    )
    rows = [header]
    for y in range(battlefield.size):
        symbols = []
        for x in range(battlefield.size):
            state = battlefield.cell_state(x, y)
            symbol = SYMBOLS[state]
            if state is CellState.UNTOUCHED and reveal and battlefield.ship_at(x, y):
                symbol = "S"
            symbols.append(f"{symbol:>2}")
        rows.append(f"{y + 1:>{width}} |" + " ".join(symbols))
    return "\n".join(rows)


def format_legend() -> str:
    return "Legend: . untouched   o miss   X hit   # sunk   S ship (revealed)"


def new_game(settings: GameSettings, retries: int = FLEET_RETRIES) -> Game:
    """Build a game, regenerating the battlefield when the fleet does not fit."""
    for attempt in range(1, retries + 1):
        try:
            return Game(settings)
        except PlacementExhausted as exc:
            logger.warning(
                "fleet_generation_retry", extra={"attempt": attempt, "reason": str(exc)}
            )
            # A fixed seed replays the same failure.
            if settings.seed is not None or attempt >= retries:
                raise
    raise ValueError(f"retries must be at least 1, got {retries}.")


def play_game(
    settings: GameSettings,
    reveal: bool = False,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Run the fire loop until the fleet is sunk or the player quits. Returns shots fired."""
    game = new_game(settings)
    ships = len(game.battlefield.all_ships())
    write(f"A {settings.size}x{settings.size} battlefield with {ships} ships.\n")
    write(format_legend())

    while True:
        write("")
        write(format_battlefield(game.battlefield, reveal=reveal or game.revealed))
        raw = read("Enter target (e.g., A1) or 'q' to quit: ").strip()
        if raw.lower() == "q":
            write("Goodbye!")
            return game.shots_fired
        report = game.fire(raw)
        write(report.message)
        if report.game_over:
            write("")
            write(format_battlefield(game.battlefield, reveal=True))
            write(f"Shots fired: {game.shots_fired}")
            return game.shots_fired


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sink the hidden fleet from the command line.")
    parser.add_argument(
        "--size", type=int, default=None, help=f"Grid size (1-{MAX_GRID_SIZE}, default 10)."
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Optional RNG seed for reproducibility."
    )
    parser.add_argument(
        "--cheats", action="store_true", default=None, help="Enable cheat codes."
    )
    parser.add_argument("--reveal", action="store_true", help="Show ship positions.")
    parser.add_argument("--verbose", action="store_true", help="Log engine events to stderr.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_console(logging.DEBUG if args.verbose else logging.WARNING)
    init_telemetry()

    try:
        settings = GameSettings.from_env(
            size=args.size, seed=args.seed, cheats_enabled=args.cheats
        )
    except ValueError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 2

    try:
        play_game(settings, reveal=args.reveal)
    except PlacementExhausted as exc:
        print(f"The fleet does not fit on this battlefield: {exc}", file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Single-player game session on top of a :class:`Battlefield`."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum

from salvo.config import GameSettings
from salvo.telemetry import get_tracer, record_game_histogram, record_game_metric

from .battlefield import Battlefield
from .errors import InvalidCoordinate, TargetSyntaxError
from .notation import format_target, parse_target
from .placement import RandomSource
from .ship import Coordinate, Ship

logger = logging.getLogger(__name__)

CHEAT_REVEAL = "MARCOPOLO"
CHEAT_HIT = "HITHERE"
CHEAT_SINK = "TORPEDO"
CHEAT_WIN = "GOTTAGOFAST"
CHEAT_CODES = frozenset({CHEAT_REVEAL, CHEAT_HIT, CHEAT_SINK, CHEAT_WIN})


class ShotOutcome(Enum):
    """How a call to :meth:`Game.fire` was resolved."""

    MISS = "miss"
    HIT = "hit"
    SUNK = "sunk"
    INVALID = "invalid"
    GAME_OVER = "game_over"
    CHEAT = "cheat"


@dataclass(frozen=True)
class ShotReport:
    """Result of one fire attempt, ready for a renderer."""

    outcome: ShotOutcome
    target: str
    message: str
    coordinate: Coordinate | None = None
    ship: Ship | None = None
    cells: tuple[Coordinate, ...] = ()
    game_over: bool = False


class Game:
    """Builds a battlefield from settings and turns typed targets into shots."""

    def __init__(
        self, settings: GameSettings | None = None, rng: RandomSource | None = None
    ) -> None:
        self.settings = settings or GameSettings()
        self._rng: RandomSource = rng if rng is not None else random.Random(self.settings.seed)
        self._tracer = get_tracer("salvo.engine.game")
        self.battlefield = Battlefield(
            self.settings.size,
            rng=self._rng,
            max_placement_attempts=self.settings.max_placement_attempts,
        )
        self.battlefield.generate_fleet(self.settings.fleet_kinds())
        self.revealed = False
        self.shots_fired = 0
        self.cheats_used = 0
        self._finished = False
        logger.info(
            "game_ready",
            extra={"grid_size": self.settings.size, "ships": len(self.battlefield.all_ships())},
        )

    def is_over(self) -> bool:
        return self.battlefield.is_defeated()

    def fire(self, target: str) -> ShotReport:
        """Resolve a typed target such as ``"B7"`` (or a cheat code)."""
        target = target.strip().upper()
        with self._tracer.start_as_current_span("game.fire") as span:
            span.set_attribute("target", target)
            report = self._fire(target)
            span.set_attribute("outcome", report.outcome.value)
            record_game_metric("salvo_game_fire_total", 1, {"outcome": report.outcome.value})
            return report

    def _fire(self, target: str) -> ShotReport:
        if self.is_over():
            logger.info("fire_after_game_over", extra={"target": target})
            return ShotReport(
                ShotOutcome.GAME_OVER, target, "The game is over, you already won!", game_over=True
            )
        if not target:
            return ShotReport(ShotOutcome.INVALID, target, "Enter a target such as A1.")

        if self.settings.cheats_enabled and target in CHEAT_CODES:
            return self._cheat(target)

        try:
            x, y = parse_target(target)
            ship = self.battlefield.hit(x, y)
        except (TargetSyntaxError, InvalidCoordinate) as exc:
            logger.info("invalid_target", extra={"target": target, "reason": str(exc)})
            return ShotReport(ShotOutcome.INVALID, target, "Invalid target! Try again.")

        self.shots_fired += 1
        coord = Coordinate(x, y)
        label = format_target(x, y)
        if ship is None:
            report = ShotReport(ShotOutcome.MISS, target, f"{label}: miss.", coord, cells=(coord,))
        elif ship.is_sunk():
            report = ShotReport(
                ShotOutcome.SUNK,
                target,
                f"{label}: you sank the {ship.kind.name}!",
                coord,
                ship,
                cells=ship.cells,
            )
        else:
            report = ShotReport(
                ShotOutcome.HIT, target, f"{label}: hit a {ship.kind.name}.", coord, ship, (coord,)
            )
        return self._with_game_over(report)

    def _cheat(self, code: str) -> ShotReport:
        with self._tracer.start_as_current_span("game.cheat") as span:
            span.set_attribute("cheat", code)
            self.cheats_used += 1
            logger.warning("cheat_code_used", extra={"cheat": code})
            record_game_metric("salvo_game_cheats_total", 1, {"cheat": code})

            if code == CHEAT_REVEAL:
                self.revealed = True
                cells = tuple(cell for ship in self.battlefield.all_ships() for cell in ship.cells)
                return ShotReport(
                    ShotOutcome.CHEAT, code, "Satellite link up, all ships revealed.", cells=cells
                )

            afloat = self.battlefield.afloat_ships()
            if code == CHEAT_HIT:
                ship = self._rng.choice(afloat)
                fired = self.battlefield.has_been_fired
                untouched = [cell for cell in ship.cells if not fired(cell.x, cell.y)]
                cell = self._rng.choice(untouched)
                self.battlefield.hit(cell.x, cell.y)
                cells = ship.cells if ship.is_sunk() else (cell,)
                report = ShotReport(
                    ShotOutcome.CHEAT, code, f"Direct hit on a {ship.kind.name}.", cell, ship, cells
                )
            elif code == CHEAT_SINK:
                ship = self._rng.choice(afloat)
                self._sink(ship)
                report = ShotReport(
                    ShotOutcome.CHEAT,
                    code,
                    f"Torpedo sank the {ship.kind.name}.",
                    ship=ship,
                    cells=ship.cells,
                )
            else:
                for ship in afloat:
                    self._sink(ship)
                cells = tuple(cell for ship in afloat for cell in ship.cells)
                report = ShotReport(ShotOutcome.CHEAT, code, "Every ship sunk.", cells=cells)
            return self._with_game_over(report)

    def _sink(self, ship: Ship) -> None:
        for cell in ship.cells:
            self.battlefield.hit(cell.x, cell.y)

    def _with_game_over(self, report: ShotReport) -> ShotReport:
        if not self.is_over():
            return report
        if not self._finished:
            self._finished = True
            record_game_metric("salvo_game_completed_total", 1, {"cheated": self.cheats_used > 0})
            record_game_histogram("salvo_game_shots_to_win", self.shots_fired, unit="1")
            logger.info(
                "game_finished",
                extra={"shots": self.shots_fired, "cheats_used": self.cheats_used},
            )
        return replace(
            report, message=f"{report.message} Congratulations, you won!", game_over=True
        )

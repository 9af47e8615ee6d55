"""Battlefield state: the fleet, the shots taken, and how shots resolve."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Iterable

from salvo.telemetry import get_meter, get_tracer

from .errors import InvalidCoordinate
from .placement import MAX_PLACEMENT_ATTEMPTS, RandomSource, generate_fleet, in_bounds
from .ship import Coordinate, Ship, ShipKind

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.battlefield")
meter = get_meter("salvo.engine.battlefield")

SHOT_COUNTER = meter.create_counter(
    "salvo_engine_shots",
    unit="1",
    description="Shots resolved by a battlefield",
)


class CellState(Enum):
    """What a renderer should show for a cell. Derived, never stored."""

    UNTOUCHED = "untouched"
    MISS = "miss"
    HIT_AFLOAT = "hit_afloat"
    HIT_SUNK = "hit_sunk"


class Battlefield:
    """A square grid owning its fleet and the history of shots fired at it.

    The fleet is generated once with :meth:`generate_fleet`; afterwards the
    only mutation is :meth:`hit`. Query methods return tuples so callers
    cannot reshape the fleet.
    """

    def __init__(
        self,
        size: int,
        rng: RandomSource | None = None,
        max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS,
    ) -> None:
        if size <= 0:
            raise ValueError(f"Battlefield size must be positive, got {size}.")
        self.size = size
        self.max_placement_attempts = max_placement_attempts
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._ships: list[Ship] = []
        self._occupied: dict[Coordinate, Ship] = {}
        self._fired: dict[Coordinate, None] = {}
        self._fleet_generated = False
        logger.info("battlefield_created", extra={"grid_size": size})

    def generate_fleet(self, kinds: Iterable[ShipKind]) -> tuple[Ship, ...]:
        """Place one ship per kind, in order. Nothing is kept if any placement fails."""
        if self._fleet_generated:
            logger.error("fleet_already_generated", extra={"grid_size": self.size})
            raise RuntimeError("Fleet has already been generated for this battlefield.")

        kinds = list(kinds)
        with tracer.start_as_current_span("battlefield.generate_fleet") as span:
            span.set_attribute("grid.size", self.size)
            span.set_attribute("fleet.requested", len(kinds))
            fleet = generate_fleet(
                self.size, kinds, self._rng, max_attempts=self.max_placement_attempts
            )
            for ship in fleet:
                self._ships.append(ship)
                for cell in ship.cells:
                    self._occupied[cell] = ship
            self._fleet_generated = True
            logger.info(
                "fleet_ready",
                extra={"grid_size": self.size, "ships": [ship.kind.name for ship in fleet]},
            )
        return tuple(fleet)

    def hit(self, x: int, y: int) -> Ship | None:
        """Fire at ``(x, y)`` and return the ship struck, if any.

        Firing at a cell twice changes nothing and returns the same ship as
        the first shot did.
        """
        coord = Coordinate(x, y)
        with tracer.start_as_current_span("battlefield.hit") as span:
            span.set_attribute("shot.x", x)
            span.set_attribute("shot.y", y)
            if not in_bounds(coord, self.size):
                logger.warning(
                    "shot_out_of_bounds", extra={"x": x, "y": y, "grid_size": self.size}
                )
                raise InvalidCoordinate(x, y, self.size)

            ship = self._occupied.get(coord)
            if coord in self._fired:
                span.set_attribute("shot.outcome", "repeat")
                SHOT_COUNTER.add(1, attributes={"outcome": "repeat"})
                logger.debug("shot_repeat", extra={"x": x, "y": y})
                return ship

            self._fired[coord] = None
            if ship is None:
                span.set_attribute("shot.outcome", "miss")
                SHOT_COUNTER.add(1, attributes={"outcome": "miss"})
                logger.info("shot_miss", extra={"x": x, "y": y})
                return None

            ship.register_hit()
            outcome = "sunk" if ship.is_sunk() else "hit"
            span.set_attribute("shot.outcome", outcome)
            span.set_attribute("ship.kind", ship.kind.name)
            SHOT_COUNTER.add(1, attributes={"outcome": outcome})
            logger.info(
                "shot_hit",
                extra={
                    "x": x,
                    "y": y,
                    "ship_kind": ship.kind.name,
                    "hit_count": ship.hit_count,
                    "sunk": ship.is_sunk(),
                },
            )
            return ship

    def has_been_fired(self, x: int, y: int) -> bool:
        return Coordinate(x, y) in self._fired

    def ship_at(self, x: int, y: int) -> Ship | None:
        return self._occupied.get(Coordinate(x, y))

    def all_ships(self) -> tuple[Ship, ...]:
        return tuple(self._ships)

    def afloat_ships(self) -> tuple[Ship, ...]:
        return tuple(ship for ship in self._ships if ship.hit_count < ship.length)

    def is_defeated(self) -> bool:
        """True once no ship is afloat."""
        return not self.afloat_ships()

    def fired_coordinates(self) -> tuple[Coordinate, ...]:
        return tuple(self._fired)

    def cell_state(self, x: int, y: int) -> CellState:
        coord = Coordinate(x, y)
        if coord not in self._fired:
            return CellState.UNTOUCHED
        ship = self._occupied.get(coord)
        if ship is None:
            return CellState.MISS
        return CellState.HIT_SUNK if ship.is_sunk() else CellState.HIT_AFLOAT

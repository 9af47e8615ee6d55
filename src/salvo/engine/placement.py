"""Random, non-overlapping ship placement."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence, TypeVar

from salvo.telemetry import get_meter, get_tracer

from .errors import PlacementExhausted
from .ship import Coordinate, Orientation, Ship, ShipKind

logger = logging.getLogger(__name__)
tracer = get_tracer("salvo.engine.placement")
meter = get_meter("salvo.engine.placement")

MAX_PLACEMENT_ATTEMPTS = 100
ORIENTATIONS: tuple[Orientation, ...] = tuple(Orientation)

CANDIDATE_COUNTER = meter.create_counter(
    "salvo_engine_placement_candidates",
    unit="1",
    description="Candidate ship positions sampled during placement",
)

_T = TypeVar("_T")


class RandomSource(Protocol):
    """The subset of :class:`random.Random` that placement relies on."""

    def randrange(self, stop: int) -> int:
        ...

    def choice(self, seq: Sequence[_T]) -> _T:
        ...


def in_bounds(coord: Coordinate, size: int) -> bool:
    return 0 <= coord.x < size and 0 <= coord.y < size


def ship_cells(bow: Coordinate, orientation: Orientation, length: int) -> tuple[Coordinate, ...]:
    """Cells covered by a ship, bow first, extending right or down."""
    if orientation is Orientation.HORIZONTAL:
        return tuple(Coordinate(bow.x + offset, bow.y) for offset in range(length))
    return tuple(Coordinate(bow.x, bow.y + offset) for offset in range(length))


def occupied_cells(ships: Iterable[Ship]) -> set[Coordinate]:
    occupied: set[Coordinate] = set()
    for ship in ships:
        occupied.update(ship.cells)
    return occupied


def place_ship(
    size: int,
    kind: ShipKind,
    existing_ships: Iterable[Ship],
    rng: RandomSource,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> Ship:
    """Sample positions until one fits the grid without touching ``existing_ships``.

    Bows are drawn from the whole grid and both orientations are equally
    likely; candidates that run off the edge or overlap are simply redrawn.
    Raises :class:`PlacementExhausted` after ``max_attempts`` rejected
    candidates.
    """
    if size <= 0:
        raise ValueError(f"Grid size must be positive, got {size}.")
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}.")

    occupied = occupied_cells(existing_ships)
    with tracer.start_as_current_span("placement.place_ship") as span:
        span.set_attribute("ship.kind", kind.name)
        span.set_attribute("ship.length", kind.length)
        span.set_attribute("grid.size", size)

        for attempt in range(1, max_attempts + 1):
            bow = Coordinate(rng.randrange(size), rng.randrange(size))
            orientation = rng.choice(ORIENTATIONS)
            cells = ship_cells(bow, orientation, kind.length)
            if all(in_bounds(cell, size) and cell not in occupied for cell in cells):
                CANDIDATE_COUNTER.add(1, attributes={"result": "accepted"})
                span.set_attribute("placement.attempts", attempt)
                logger.debug(
                    "ship_placed",
                    extra={
                        "ship_kind": kind.name,
                        "orientation": orientation.name,
                        "x": bow.x,
                        "y": bow.y,
                        "attempts": attempt,
                    },
                )
                return Ship(kind=kind, bow=bow, orientation=orientation, cells=cells)
            CANDIDATE_COUNTER.add(1, attributes={"result": "rejected"})

        error = PlacementExhausted(kind, size, max_attempts)
        span.set_attribute("placement.attempts", max_attempts)
        logger.error(
            "ship_placement_exhausted",
            extra={"ship_kind": kind.name, "grid_size": size, "attempts": max_attempts},
        )
        raise error


def generate_fleet(
    size: int,
    kinds: Iterable[ShipKind],
    rng: RandomSource,
    existing: Iterable[Ship] = (),
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> list[Ship]:
    """Place ``kinds`` in order; each ship is constrained by those before it."""
    placed: list[Ship] = list(existing)
    fleet: list[Ship] = []
    with tracer.start_as_current_span("placement.generate_fleet") as span:
        span.set_attribute("grid.size", size)
        for kind in kinds:
            ship = place_ship(size, kind, placed, rng, max_attempts=max_attempts)
            placed.append(ship)
            fleet.append(ship)
        span.set_attribute("fleet.size", len(fleet))
    return fleet

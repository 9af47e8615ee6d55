"""Ship domain model for the salvo engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """Immutable grid coordinate; ``x`` is the column, ``y`` the row."""

    x: int
    y: int


class Orientation(Enum):
    """Allowed ship orientations."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class ShipKind:
    """A named class of ship with a fixed length."""

    name: str
    length: int

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError(f"Ship length must be at least 1, got {self.length}.")


BATTLESHIP = ShipKind("battleship", 5)
DESTROYER = ShipKind("destroyer", 4)


@dataclass(frozen=True, eq=False)
class Ship:
    """A single ship on the battlefield.

    Only the hit count changes after construction, and only through
    ``register_hit``. Ships compare by identity, so the object returned from a
    lookup is the ship itself.
    """

    kind: ShipKind
    bow: Coordinate
    orientation: Orientation
    cells: tuple[Coordinate, ...]
    _hit_count: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.cells) != self.kind.length:
            raise ValueError(
                f"{self.kind.name} needs {self.kind.length} cells, got {len(self.cells)}."
            )

    @property
    def length(self) -> int:
        return self.kind.length

    @property
    def hit_count(self) -> int:
        return self._hit_count

    def occupies(self, coord: Coordinate) -> bool:
        return coord in self.cells

    def is_sunk(self) -> bool:
        """Return True once every cell has taken a hit."""
        return self._hit_count == self.length

    def register_hit(self) -> None:
        """Count one more hit, never past the ship's length."""
        if self._hit_count >= self.length:
            raise RuntimeError(f"{self.kind.name} is already sunk.")
        object.__setattr__(self, "_hit_count", self._hit_count + 1)

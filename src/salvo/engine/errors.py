"""Exceptions raised by the salvo engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .ship import ShipKind


class SalvoError(Exception):
    """Base class for all engine errors."""


class PlacementExhausted(SalvoError):
    """No valid position was found for a ship within the attempt cap."""

    def __init__(self, kind: ShipKind, size: int, attempts: int) -> None:
        super().__init__(
            f"Could not place {kind.name} (length {kind.length}) on a "
            f"{size}x{size} grid after {attempts} attempts."
        )
        self.kind = kind
        self.size = size
        self.attempts = attempts


class InvalidCoordinate(SalvoError, ValueError):
    """A shot was aimed outside the battlefield."""

    def __init__(self, x: int, y: int, size: int) -> None:
        super().__init__(f"Coordinate ({x}, {y}) is outside the {size}x{size} grid.")
        self.x = x
        self.y = y
        self.size = size


class TargetSyntaxError(SalvoError, ValueError):
    """Human-readable target could not be parsed."""

"""Conversion between human targets like ``"B7"`` and grid coordinates."""

from __future__ import annotations

from .errors import TargetSyntaxError

COLUMN_LABELS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def letter_to_number(letter: str) -> int:
    """``"A"`` -> 0, ``"B"`` -> 1, ..."""
    return ord(letter.upper()) - ord("A")


def number_to_letter(number: int) -> str:
    """0 -> ``"A"``, 1 -> ``"B"``, ..."""
    return chr(number + ord("A"))


def parse_target(text: str) -> tuple[int, int]:
    """Split a target into a column letter and a 1-based row number.

    Bounds are not checked here; the battlefield rejects out-of-range shots.
    """
    cleaned = text.strip().upper()
    if not cleaned:
        raise TargetSyntaxError("Empty target.")
    column, row = cleaned[0], cleaned[1:].strip()
    if column not in COLUMN_LABELS:
        raise TargetSyntaxError(f"Column must be a letter, got {column!r}.")
    if not row.isdigit():
        raise TargetSyntaxError(f"Row must be a number, got {row!r}.")
    try:
        number = int(row)
    except ValueError as exc:
        raise TargetSyntaxError(f"Row must be a number, got {row!r}.") from exc
    return letter_to_number(column), number - 1


def format_target(x: int, y: int) -> str:
    return f"{number_to_letter(x)}{y + 1}"

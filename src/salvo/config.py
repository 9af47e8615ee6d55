"""Game settings loaded from the environment."""

from __future__ import annotations

import os
from typing import Any, Dict

from pydantic import BaseModel, Field, model_validator

from salvo.engine.placement import MAX_PLACEMENT_ATTEMPTS
from salvo.engine.ship import ShipKind
from salvo.telemetry.config import env_flag

MAX_GRID_SIZE = 26


class GameSettings(BaseModel):
    """Grid size, fleet composition and game toggles."""

    size: int = Field(default=10, ge=1, le=MAX_GRID_SIZE)
    ship_kinds: dict[str, int] = Field(
        default_factory=lambda: {"battleship": 5, "destroyer": 4}
    )
    fleet: list[str] = Field(default_factory=lambda: ["battleship", "destroyer", "destroyer"])
    max_placement_attempts: int = Field(default=MAX_PLACEMENT_ATTEMPTS, ge=1)
    seed: int | None = None
    cheats_enabled: bool = False

    @model_validator(mode="after")
    def _check_fleet(self) -> "GameSettings":
        for name, length in self.ship_kinds.items():
            if length < 1:
                raise ValueError(f"Ship kind {name!r} must have a positive length.")
        unknown = [name for name in self.fleet if name not in self.ship_kinds]
        if unknown:
            raise ValueError(f"Fleet references unknown ship kinds: {', '.join(unknown)}.")
        return self

    def fleet_kinds(self) -> list[ShipKind]:
        """The fleet as ship kinds, in placement order."""
        kinds = {name: ShipKind(name, length) for name, length in self.ship_kinds.items()}
        return [kinds[name] for name in self.fleet]

    @classmethod
    def from_env(cls, **overrides: Any) -> "GameSettings":
        """Build settings from `SALVO_*` env vars; explicit overrides win."""

        data: Dict[str, Any] = {}

        for field, env_name in (
            ("size", "SALVO_SIZE"),
            ("seed", "SALVO_SEED"),
            ("max_placement_attempts", "SALVO_MAX_PLACEMENT_ATTEMPTS"),
        ):
            value = os.getenv(env_name)
            if value:
                data[field] = int(value)

        cheats = env_flag("SALVO_CHEATS_ENABLED")
        if cheats is not None:
            data["cheats_enabled"] = cheats

        fleet_env = os.getenv("SALVO_FLEET")
        if fleet_env:
            data["fleet"] = [name.strip() for name in fleet_env.split(",") if name.strip()]

        kinds_env = os.getenv("SALVO_SHIP_KINDS")
        if kinds_env:
            kinds: dict[str, int] = {}
            for part in kinds_env.split(","):
                name, sep, length = part.partition("=")
                if not sep or not name.strip():
                    raise ValueError(
                        f"Malformed SALVO_SHIP_KINDS entry {part.strip()!r}; expected name=length."
                    )
                try:
                    kinds[name.strip()] = int(length)
                except ValueError as exc:
                    raise ValueError(
                        f"Ship length in SALVO_SHIP_KINDS entry {part.strip()!r} must be an integer."
                    ) from exc
            data["ship_kinds"] = kinds

        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)


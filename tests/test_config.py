"""Tests for game settings."""

import pytest
from pydantic import ValidationError
from salvo.config import GameSettings
from salvo.engine.ship import ShipKind


def test_defaults_match_the_classic_fleet() -> None:
    settings = GameSettings()
    assert settings.size == 10
    assert settings.max_placement_attempts == 100
    assert not settings.cheats_enabled
    assert settings.fleet_kinds() == [
        ShipKind("battleship", 5),
        ShipKind("destroyer", 4),
        ShipKind("destroyer", 4),
    ]


def test_fleet_must_reference_known_kinds() -> None:
    with pytest.raises(ValidationError):
        GameSettings(fleet=["battleship", "submarine"])


def test_kind_lengths_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        GameSettings(ship_kinds={"raft": 0}, fleet=["raft"])


@pytest.mark.parametrize("size", [0, 27])
def test_size_limits(size: int) -> None:
    with pytest.raises(ValidationError):
        GameSettings(size=size)


def test_from_env_reads_salvo_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SALVO_SIZE", "8")
    monkeypatch.setenv("SALVO_SEED", "99")
    monkeypatch.setenv("SALVO_CHEATS_ENABLED", "yes")
    monkeypatch.setenv("SALVO_SHIP_KINDS", "cruiser=3, patrol=2")
    monkeypatch.setenv("SALVO_FLEET", "cruiser,patrol,patrol")
    monkeypatch.setenv("SALVO_MAX_PLACEMENT_ATTEMPTS", "250")

    settings = GameSettings.from_env()
    assert settings.size == 8
    assert settings.seed == 99
    assert settings.cheats_enabled
    assert settings.max_placement_attempts == 250
    assert [kind.length for kind in settings.fleet_kinds()] == [3, 2, 2]


def test_from_env_overrides_win_and_none_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SALVO_SIZE", "8")
    monkeypatch.setenv("SALVO_CHEATS_ENABLED", "true")
    settings = GameSettings.from_env(size=12, seed=None, cheats_enabled=False)
    assert settings.size == 12
    assert settings.seed is None
    assert settings.cheats_enabled is False


@pytest.mark.parametrize("value", ["cruiser3", "cruiser=3,patrol", "=3", "cruiser=three"])
def test_from_env_rejects_malformed_ship_kinds(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("SALVO_SHIP_KINDS", value)
    with pytest.raises(ValueError, match="SALVO_SHIP_KINDS"):
        GameSettings.from_env()

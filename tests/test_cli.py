"""Tests for the command-line driver."""

import pytest
from salvo import cli
from salvo.config import GameSettings
from salvo.engine.battlefield import Battlefield
from salvo.engine.errors import PlacementExhausted
from salvo.engine.game import Game
from salvo.engine.ship import DESTROYER, Orientation

ONE_DESTROYER = {"ship_kinds": {"destroyer": 4}, "fleet": ["destroyer"]}


def test_format_battlefield_marks_shots_and_revealed_ships(scripted_rng) -> None:
    field = Battlefield(5, rng=scripted_rng([(0, 1, Orientation.HORIZONTAL)]))
    field.generate_fleet([DESTROYER])
    field.hit(0, 1)
    field.hit(4, 4)

    hidden = cli.format_battlefield(field).splitlines()
    assert hidden[0].split() == ["A", "B", "C", "D", "E"]
    assert hidden[2] == "2 | X  .  .  .  ."
    assert hidden[5] == "5 | .  .  .  .  o"

    revealed = cli.format_battlefield(field, reveal=True).splitlines()
    assert revealed[2] == "2 | X  S  S  S  ."

    for x in (1, 2, 3):
        field.hit(x, 1)
    assert cli.format_battlefield(field).splitlines()[2] == "2 | #  #  #  #  ."


def test_play_game_until_fleet_is_sunk(monkeypatch: pytest.MonkeyPatch, scripted_rng) -> None:
    rng = scripted_rng([(0, 0, Orientation.VERTICAL)])
    monkeypatch.setattr(cli, "Game", lambda settings: Game(settings, rng=rng))
    inputs = iter(["A1", "zz", "A2", "A3", "A4"])
    output: list[str] = []

    shots = cli.play_game(
        GameSettings(**ONE_DESTROYER), read=lambda _: next(inputs), write=output.append
    )
    assert shots == 4
    assert "Invalid target! Try again." in output
    assert any("you sank the destroyer" in line for line in output)
    assert output[-1] == "Shots fired: 4"


def test_play_game_quit() -> None:
    output: list[str] = []
    shots = cli.play_game(GameSettings(seed=1), read=lambda _: "q", write=output.append)
    assert shots == 0
    assert output[-1] == "Goodbye!"
    assert output[1] == cli.format_legend()


def test_new_game_retries_unseeded_fleets(monkeypatch: pytest.MonkeyPatch) -> None:
    attempts = {"count": 0}
    settings = GameSettings()

    def flaky_game(settings):
        attempts["count"] += 1
        if attempts["count"] < 3:
            raise PlacementExhausted(DESTROYER, settings.size, 100)
        return "game"

    monkeypatch.setattr(cli, "Game", flaky_game)
    assert cli.new_game(settings) == "game"
    assert attempts["count"] == 3


def test_new_game_does_not_retry_seeded_fleets(monkeypatch: pytest.MonkeyPatch) -> None:
    attempts = {"count": 0}

    def failing_game(settings):
        attempts["count"] += 1
        raise PlacementExhausted(DESTROYER, settings.size, 100)

    monkeypatch.setattr(cli, "Game", failing_game)
    with pytest.raises(PlacementExhausted):
        cli.new_game(GameSettings(seed=4))
    assert attempts["count"] == 1


def test_main_rejects_bad_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "init_telemetry", lambda: None)
    assert cli.main(["--size", "0"]) == 2


def test_main_reports_unplaceable_fleet(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "init_telemetry", lambda: None)

    def no_room(settings, reveal=False):
        raise PlacementExhausted(DESTROYER, settings.size, 100)

    monkeypatch.setattr(cli, "play_game", no_room)
    assert cli.main(["--seed", "1"]) == 1


def test_main_passes_flags_to_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "init_telemetry", lambda: None)
    seen = {}

    def fake_play(settings, reveal=False):
        seen["settings"] = settings
        seen["reveal"] = reveal
        return 0

    monkeypatch.setattr(cli, "play_game", fake_play)
    assert cli.main(["--size", "6", "--seed", "3", "--cheats", "--reveal"]) == 0
    assert seen["settings"].size == 6
    assert seen["settings"].seed == 3
    assert seen["settings"].cheats_enabled
    assert seen["reveal"] is True

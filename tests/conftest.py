"""Shared fixtures for the salvo test suite."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable, Sequence

import pytest
from salvo.engine.ship import Orientation


class ScriptedRandom:
    """Random source that replays pre-arranged placements.

    Each placement is ``(x, y, orientation)``; ``randrange`` yields the
    coordinates and ``choice`` yields the orientation. Extra ``choices`` are
    served after the placements are used up.
    """

    def __init__(
        self,
        placements: Iterable[tuple[int, int, Orientation]] = (),
        choices: Iterable[Any] = (),
    ) -> None:
        self.ints: deque[int] = deque()
        self.choices: deque[Any] = deque()
        for x, y, orientation in placements:
            self.ints.extend((x, y))
            self.choices.append(orientation)
        self.choices.extend(choices)
        self.randrange_calls: list[int] = []
        self.choice_calls: list[tuple[Any, ...]] = []

    def randrange(self, stop: int) -> int:
        self.randrange_calls.append(stop)
        value = self.ints.popleft()
        assert 0 <= value < stop, f"scripted value {value} outside range({stop})"
        return value

    def choice(self, seq: Sequence[Any]) -> Any:
        self.choice_calls.append(tuple(seq))
        value = self.choices.popleft()
        assert value in seq, f"scripted choice {value!r} not offered"
        return value


@pytest.fixture
def scripted_rng() -> type[ScriptedRandom]:
    return ScriptedRandom

"""Shared fixtures: a hand-driven clock, a scheduler bound to it, and a
listener that records every engine notification."""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from backend.config import GameConfig
from backend.engine.gameplay import PuzzleEngine
from backend.engine.scheduler import PollingScheduler


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingListener:
    def __init__(self) -> None:
        self.states: list[tuple[tuple[int, ...], tuple[int, int]]] = []
        self.move_counts: list[int] = []
        self.wins: list[tuple[int, float]] = []
        self.stalls: list[int] = []
        self.ticks: list[float] = []

    def on_state_changed(
        self, grid: tuple[int, ...], blank_pos: tuple[int, int]
    ) -> None:
        self.states.append((grid, blank_pos))

    def on_move_count_changed(self, count: int) -> None:
        self.move_counts.append(count)

    def on_win(self, moves: int, elapsed: float) -> None:
        self.wins.append((moves, elapsed))

    def on_solve_stalled(self, moves: int) -> None:
        self.stalls.append(moves)

    def on_elapsed_tick(self, elapsed: float) -> None:
        self.ticks.append(elapsed)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> PollingScheduler:
    return PollingScheduler(clock)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def make_engine(
    clock: FakeClock,
    scheduler: PollingScheduler,
    rng: random.Random,
    listener: RecordingListener,
) -> Callable[..., PuzzleEngine]:
    """Build an engine on a given arrangement, or a shuffled one if omitted."""

    def _make(tiles: list[int] | None = None, **config) -> PuzzleEngine:
        kwargs = dict(scheduler=scheduler, clock=clock, rng=rng)
        if tiles is None:
            engine = PuzzleEngine(GameConfig(**config), **kwargs)
            engine.add_listener(listener)
            engine.initialize()
        else:
            size = round(len(tiles) ** 0.5)
            engine = PuzzleEngine.from_tiles(
                tiles, GameConfig(size=size, **config), **kwargs
            )
            engine.add_listener(listener)
        return engine

    return _make


@pytest.fixture
def run_for(clock: FakeClock, scheduler: PollingScheduler) -> Callable[[float], int]:
    """Advance the fake clock and fire whatever became due."""

    def _run(seconds: float) -> int:
        clock.advance(seconds)
        return scheduler.run_pending()

    return _run

"""Tunable settings for a puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass

MIN_SIZE = 2


@dataclass(frozen=True)
class GameConfig:
    """Board size and timing of the engine's periodic activities.

    ``tick_interval`` paces the elapsed-time display tick and
    ``solve_interval`` the auto-solver, both in seconds.
    """

    size: int = 3
    tick_interval: float = 1.0
    solve_interval: float = 0.2
    max_shuffle_attempts: int = 1000

    def __post_init__(self) -> None:
        if self.size < MIN_SIZE:
            raise ValueError(f"Board size must be at least {MIN_SIZE}, got {self.size}.")
        if self.tick_interval <= 0 or self.solve_interval <= 0:
            raise ValueError("Tick and solve intervals must be positive.")
        if self.max_shuffle_attempts < 1:
            raise ValueError("max_shuffle_attempts must be at least 1.")

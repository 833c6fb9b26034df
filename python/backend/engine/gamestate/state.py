"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import StrEnum

from backend.models.board import Board


class PlayState(StrEnum):
    IDLE = "idle"
    PLAYING = "playing"
    SOLVING = "solving"
    WON = "won"


class GameState:
    """Holds the current board, move counter, play-state and elapsed time."""

    def __init__(
        self, board: Board, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.board = board
        self.moves: int = 0
        self.play_state = PlayState.IDLE
        self._clock = clock
        self._start_time: float = 0.0
        self._elapsed_banked: float = 0.0
        self._running: bool = False

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (self._clock() - self._start_time)
        return self._elapsed_banked

    def start(self) -> None:
        """Start the clock; elapsed time reads 0 until then."""
        if not self._running:
            self._start_time = self._clock()
            self._running = True

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += self._clock() - self._start_time
            self._running = False

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

"""
Protocol definitions for the puzzle engine's observers.

Frontends register a ``PuzzleListener`` with the engine and redraw from the
notifications; they never poll the board for changes.

Notification Flow:
    attempt_move / solver tick -> on_state_changed -> on_move_count_changed
                                          |
                                          v (if solved)
                                        on_win
    solver tick, no step left, unsolved -> on_solve_stalled
    display tick (while playing) -> on_elapsed_tick
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PuzzleListener(Protocol):
    """Receives the engine's outbound notifications.

    ``grid`` is a row-major snapshot; ``blank_pos`` is ``(row, col)``.
    ``on_win`` fires exactly once per session.  ``on_solve_stalled`` fires
    when the auto-solver gives up and control returns to the player.
    """

    def on_state_changed(
        self, grid: tuple[int, ...], blank_pos: tuple[int, int]
    ) -> None: ...

    def on_move_count_changed(self, count: int) -> None: ...

    def on_win(self, moves: int, elapsed: float) -> None: ...

    def on_solve_stalled(self, moves: int) -> None: ...

    def on_elapsed_tick(self, elapsed: float) -> None: ...

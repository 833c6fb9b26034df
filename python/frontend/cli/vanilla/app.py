"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
"""

from __future__ import annotations

import sys

from backend.config import GameConfig
from backend.engine.gameplay import PuzzleEngine
from backend.engine.gamestate import PlayState
from backend.engine.scheduler import PollingScheduler
from backend.models.board import Board
from frontend.cli.controls import digits_reach_all_tiles, run_loop


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_DIM = "\033[2m"     # dim
_R = "\033[0m"       # reset


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board) -> str:
    """Return an ANSI-coloured text representation of the board.

    Correct tiles are green, tiles next to the blank are cyan.
    """
    width = len(str(board.size * board.size - 1))  # widest number
    cell_w = width + 2  # padding
    sep = "+" + (("-" * cell_w + "+") * board.size)

    lines: list[str] = [sep]
    for r, row in enumerate(board.rows()):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val == 0:
                cells.append(f"{_DIM} {'·':>{width}} {_R}")
            elif board.is_tile_correct(r, c):
                cells.append(f"{_G} {val:>{width}} {_R}")
            elif board.is_adjacent_to_blank(r, c):
                cells.append(f"{_C} {val:>{width}} {_R}")
            else:
                cells.append(f" {val:>{width}} ")
        lines.append("|" + "|".join(cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


# -- screen -------------------------------------------------------------------


class _TerminalView:
    """Redraws the game screen from engine notifications."""

    def __init__(self, engine: PuzzleEngine) -> None:
        self.engine = engine
        self.status = ""

    def _stats_line(self, elapsed: float) -> str:
        return (
            f"  Moves: {_Y}{self.engine.moves}{_R}  |  "
            f"Time: {_Y}{_format_time(elapsed)}{_R}"
        )

    def redraw(self) -> None:
        """Draw the full screen; the stats line goes last, without newline."""
        engine = self.engine
        _clear()
        size = engine.size
        title = f"=== Sliding Puzzle ({size}×{size}) ==="
        if engine.play_state is PlayState.SOLVING:
            title = f"=== Solving… ({size}×{size}) ==="
        print(f"  {_C}{title}{_R}")
        print()
        print(_render_board(engine.board))
        print()
        keys = [f"{_C}WASD{_R}/{_C}Arrows{_R}: move"]
        if digits_reach_all_tiles(engine):
            keys.append(f"{_C}1-{size * size - 1}{_R}: slide tile")
        keys += [f"{_C}V{_R}: solve", f"{_C}N{_R}: new game", f"{_C}Q{_R}: quit"]
        print("  " + "  |  ".join(keys))
        if self.status:
            print(f"\n  {self.status}")
        sys.stdout.write(f"\n{self._stats_line(engine.elapsed_time)}")
        sys.stdout.flush()

    # -- PuzzleListener -------------------------------------------------------

    def on_state_changed(
        self, grid: tuple[int, ...], blank_pos: tuple[int, int]
    ) -> None:
        self.redraw()

    def on_move_count_changed(self, count: int) -> None:
        sys.stdout.write(f"\r\033[K{self._stats_line(self.engine.elapsed_time)}")
        sys.stdout.flush()

    def on_solve_stalled(self, moves: int) -> None:
        self.status = f"{_Y}Solver stalled after {moves} moves, your turn.{_R}"
        self.redraw()

    def on_elapsed_tick(self, elapsed: float) -> None:
        sys.stdout.write(f"\r\033[K{self._stats_line(elapsed)}")
        sys.stdout.flush()

    def on_win(self, moves: int, elapsed: float) -> None:
        self.status = (
            f"{_G}★ CONGRATULATIONS! Solved in {moves} moves, "
            f"{_format_time(elapsed)} ★{_R}  "
            f"{_DIM}N: play again  Q: quit{_R}"
        )
        self.redraw()

    # -- key feedback ---------------------------------------------------------

    def on_key(self, key: str) -> None:
        """Status feedback, called after the key reached the engine."""
        if key == "new":
            self.status = ""
            self.redraw()
        elif key == "solve" and self.engine.play_state is PlayState.SOLVING:
            self.status = f"{_C}Auto-solving…{_R}"
            self.redraw()


# -- public entry point -------------------------------------------------------


def run(config: GameConfig) -> None:
    """Launch the vanilla terminal game."""
    scheduler = PollingScheduler()
    engine = PuzzleEngine(config, scheduler=scheduler)
    view = _TerminalView(engine)
    engine.add_listener(view)
    engine.new_game()
    try:
        run_loop(engine, scheduler, on_key=view.on_key)
    finally:
        _clear()
        print("  Goodbye!\n")

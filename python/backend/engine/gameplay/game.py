"""Core gameplay logic — processes moves, checks the win and runs the solver."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable

from backend.config import MIN_SIZE, GameConfig
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamesolver import GreedySolver
from backend.engine.gamestate import GameState, PlayState
from backend.engine.protocols import PuzzleListener
from backend.engine.scheduler import PollingScheduler, Scheduler, TimerHandle
from backend.models.board import BLANK_OFFSETS, Board, Direction

logger = logging.getLogger(__name__)


class PuzzleEngine:
    """Owns one board, its game session and the periodic activities.

    The engine starts ``IDLE`` on a solved board; ``initialize`` or
    ``new_game`` deals a shuffled one.  Invalid requests (moving a tile
    that is not next to the blank, moving while the solver runs, solving
    when not playing) are ignored and return ``False``.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        scheduler: Scheduler | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.size = self.config.size
        self._clock = clock or time.monotonic
        self._scheduler = scheduler or PollingScheduler(self._clock)
        self._rng = rng or random.Random()
        self._listeners: list[PuzzleListener] = []
        self._tick_timer: TimerHandle | None = None
        self._solve_timer: TimerHandle | None = None
        self.state = GameState(GameGenerator.solved(self.size), self._clock)

    @classmethod
    def from_tiles(
        cls,
        tiles: list[int],
        config: GameConfig | None = None,
        **kwargs,
    ) -> PuzzleEngine:
        """Start a session on an existing arrangement (e.g. a replay)."""
        size = round(len(tiles) ** 0.5)
        config = config or GameConfig(size=size)
        engine = cls(config, **kwargs)
        engine._start_session(Board.from_flat(config.size, tiles))
        return engine

    # -- listeners ------------------------------------------------------------

    def add_listener(self, listener: PuzzleListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: PuzzleListener) -> None:
        self._listeners.remove(listener)

    # -- lifecycle ------------------------------------------------------------

    def initialize(self, size: int | None = None) -> None:
        """Deal a fresh solvable shuffle and start a new session."""
        if size is not None:
            if size < MIN_SIZE:
                raise ValueError(f"Board size must be at least {MIN_SIZE}, got {size}.")
            self.size = size
        board = GameGenerator.generate(
            self.size, self._rng, self.config.max_shuffle_attempts
        )
        self._start_session(board)

    def new_game(self) -> None:
        self.initialize(self.size)

    def _start_session(self, board: Board) -> None:
        self._cancel_timers()
        self.size = board.size
        self.state = GameState(board, self._clock)
        self.state.play_state = PlayState.PLAYING
        self.state.start()
        self._start_tick()
        logger.info("New %dx%d session: %s", self.size, self.size, board.tiles)
        self._notify_state()
        self._notify_moves()

    # -- queries --------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def grid(self) -> tuple[int, ...]:
        return tuple(self.state.board.tiles)

    @property
    def blank_pos(self) -> tuple[int, int]:
        return self.state.board.blank_pos

    @property
    def moves(self) -> int:
        return self.state.moves

    @property
    def elapsed_time(self) -> float:
        return self.state.elapsed_time

    @property
    def play_state(self) -> PlayState:
        return self.state.play_state

    def is_tile_movable(self, row: int, col: int) -> bool:
        """True if (row, col) is on the board and next to the blank."""
        board = self.board
        return board.in_bounds(row, col) and board.is_adjacent_to_blank(row, col)

    def check_win(self) -> bool:
        return self.board.is_solved()

    # -- movement -------------------------------------------------------------

    def attempt_move(self, row: int, col: int) -> bool:
        """Slide the tile at (row, col) into the blank.

        Returns True if the tile was adjacent to the blank, the game was
        being played and the move was applied.
        """
        if self.play_state is not PlayState.PLAYING:
            return False
        if not self.is_tile_movable(row, col):
            return False
        self._apply(row, col)
        if self.check_win():
            self.handle_win()
        return True

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent blank.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        """
        return self.attempt_move(*self._tile_for(direction))

    def _tile_for(self, direction: Direction) -> tuple[int, int]:
        br, bc = self.blank_pos
        dr, dc = BLANK_OFFSETS[direction]
        return br + dr, bc + dc

    def _apply(self, row: int, col: int) -> None:
        self.board.slide(row, col)
        self.state.increment_moves()
        self._notify_state()
        self._notify_moves()

    # -- win ------------------------------------------------------------------

    def handle_win(self) -> None:
        if self.play_state is PlayState.WON:
            return
        self.state.play_state = PlayState.WON
        self.state.pause()
        self._cancel_timers()
        moves, elapsed = self.moves, self.elapsed_time
        logger.info("Solved in %d moves, %.1fs", moves, elapsed)
        for listener in list(self._listeners):
            listener.on_win(moves, elapsed)

    # -- auto-solve -----------------------------------------------------------

    def solve(self) -> bool:
        """Start the greedy solver; one step per ``solve_interval``.

        Returns False (and does nothing) unless the game is being played.
        """
        if self.play_state is not PlayState.PLAYING:
            return False
        self.state.play_state = PlayState.SOLVING
        self._cancel(self._tick_timer)
        self._tick_timer = None
        self._solve_timer = self._scheduler.call_every(
            self.config.solve_interval, self._solve_step
        )
        logger.info("Auto-solve started at move %d", self.moves)
        return True

    def _solve_step(self) -> None:
        if self.play_state is not PlayState.SOLVING:
            self._stop_solver()
            return

        direction = GreedySolver.next_move(self.board)
        if direction is not None:
            self._apply(*self._tile_for(direction))
            if self.check_win():
                self._stop_solver()
                self.handle_win()
            return

        self._stop_solver()
        if self.check_win():
            self.handle_win()
            return
        logger.info("Auto-solve stalled after %d moves", self.moves)
        self.state.play_state = PlayState.PLAYING
        self._start_tick()
        for listener in list(self._listeners):
            listener.on_solve_stalled(self.moves)

    def _stop_solver(self) -> None:
        self._cancel(self._solve_timer)
        self._solve_timer = None

    # -- periodic display tick ------------------------------------------------

    def _start_tick(self) -> None:
        self._tick_timer = self._scheduler.call_every(
            self.config.tick_interval, self._tick
        )

    def _tick(self) -> None:
        if self.play_state is not PlayState.PLAYING:
            return
        elapsed = self.elapsed_time
        for listener in list(self._listeners):
            listener.on_elapsed_tick(elapsed)

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _cancel(timer: TimerHandle | None) -> None:
        if timer is not None:
            timer.cancel()

    def _cancel_timers(self) -> None:
        self._cancel(self._tick_timer)
        self._cancel(self._solve_timer)
        self._tick_timer = None
        self._solve_timer = None

    def _notify_state(self) -> None:
        grid, blank = self.grid, self.blank_pos
        for listener in list(self._listeners):
            listener.on_state_changed(grid, blank)

    def _notify_moves(self) -> None:
        for listener in list(self._listeners):
            listener.on_move_count_changed(self.moves)

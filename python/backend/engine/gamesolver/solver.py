"""Greedy, one-step-at-a-time sliding puzzle solver.

The solver never plans: it only slides a misplaced tile when the blank
already sits next to it on the side of its target.  The misplaced tile
itself moves; the solver never shifts a neighbour to bring the blank
closer.  Each step lowers the total Manhattan distance by one, so the
loop always ends, but it frequently stalls with the board unsolved.
"""

from __future__ import annotations

import logging

from backend.models.board import Board, Direction

logger = logging.getLogger(__name__)


class GreedySolver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def next_move(board: Board) -> Direction | None:
        """Return the step to take this tick, or ``None`` if none is possible.

        Positions are scanned in row-major order; the first misplaced
        position whose tile can be nudged toward it wins.
        """
        for index in range(len(board.tiles) - 1):
            value = index + 1
            if board.tiles[index] == value:
                continue
            direction = GreedySolver.nudge(board, value)
            if direction is not None:
                logger.debug("Tile %d steps %s", value, direction.value)
                return direction
        return None

    @staticmethod
    def nudge(board: Board, value: int) -> Direction | None:
        """Return the direction tile *value* can take toward its target.

        Rows are aligned before columns.  A direction only counts if the
        blank is the neighbour on that side.
        """
        row, col = board.find(value)
        target_row, target_col = board.target_position(value)

        candidates: list[tuple[Direction, tuple[int, int]]] = []
        if row > target_row:
            candidates.append((Direction.UP, (row - 1, col)))
        elif row < target_row:
            candidates.append((Direction.DOWN, (row + 1, col)))
        if col > target_col:
            candidates.append((Direction.LEFT, (row, col - 1)))
        elif col < target_col:
            candidates.append((Direction.RIGHT, (row, col + 1)))

        for direction, cell in candidates:
            if cell == board.blank_pos:
                return direction
        return None

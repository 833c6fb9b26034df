"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import logging
import random

from backend.models.board import Board

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


class GameGenerator:
    """Creates solvable puzzles by shuffling the full tile sequence."""

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        return Board.goal(size)

    @staticmethod
    def count_inversions(tiles: list[int]) -> int:
        """Count pairs of numbered tiles that appear out of order.

        The blank (0) is ignored.
        """
        values = [v for v in tiles if v != 0]
        inversions = 0
        for i, a in enumerate(values):
            for b in values[i + 1 :]:
                if a > b:
                    inversions += 1
        return inversions

    @staticmethod
    def is_solvable(tiles: list[int], size: int) -> bool:
        """Return True if *tiles* can reach the goal state.

        Odd widths: the inversion count must be even.  Even widths: the
        inversion count plus the blank's row distance from the bottom row
        must be even.
        """
        inversions = GameGenerator.count_inversions(tiles)
        if size % 2 == 1:
            return inversions % 2 == 0
        blank_row = tiles.index(0) // size
        return (inversions + (size - 1 - blank_row)) % 2 == 0

    @staticmethod
    def generate(
        size: int,
        rng: random.Random | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> Board:
        """Return a random *solvable* board of the given size.

        The solved sequence is shuffled (Fisher-Yates, blank included) until
        the permutation passes the parity test.
        """
        rng = rng or random.Random()
        tiles = GameGenerator.solved(size).tiles

        for attempt in range(1, max_attempts + 1):
            rng.shuffle(tiles)
            if GameGenerator.is_solvable(tiles, size):
                logger.debug("Solvable shuffle found after %d attempt(s)", attempt)
                return Board(size=size, tiles=tiles)

        logger.warning(
            "No solvable shuffle in %d attempts, repairing parity", max_attempts
        )
        GameGenerator._flip_parity(tiles)
        return Board(size=size, tiles=tiles)

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _flip_parity(tiles: list[int]) -> None:
        """Swap the first two numbered tiles, changing the inversion parity."""
        i, j = [k for k, v in enumerate(tiles) if v != 0][:2]
        tiles[i], tiles[j] = tiles[j], tiles[i]

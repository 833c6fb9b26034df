"""Board model for the sliding puzzle game."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Direction(StrEnum):
    """Where a *tile* moves (``UP`` slides the tile below the blank upward)."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Offset from the blank to the tile that slides into it for each direction.
BLANK_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


@dataclass
class Board:
    """Represents the sliding puzzle board.

    Tiles are stored as a flat row-major list of ints, ``index = row * size
    + col``.  0 represents the blank space.
    """

    size: int
    tiles: list[int]
    blank_pos: tuple[int, int] = field(init=False)

    def __post_init__(self) -> None:
        self.blank_pos = self.position(self.tiles.index(0))

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        if len(flat) != size * size:
            raise ValueError(
                f"Expected {size * size} tiles for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        if sorted(flat) != list(range(size * size)):
            raise ValueError(
                f"Tiles must be a permutation of 0..{size * size - 1}, "
                f"got {list(flat)}."
            )
        return cls(size=size, tiles=list(flat))

    @classmethod
    def goal(cls, size: int) -> Board:
        """Return the solved board ``[1, 2, ..., size²-1, 0]``."""
        return cls(size=size, tiles=[*range(1, size * size), 0])

    # -- coordinates ----------------------------------------------------------

    def index(self, row: int, col: int) -> int:
        return row * self.size + col

    def position(self, index: int) -> tuple[int, int]:
        return divmod(index, self.size)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def target_position(self, value: int) -> tuple[int, int]:
        """Where *value* sits in the solved board."""
        if value == 0:
            return self.size - 1, self.size - 1
        return self.position(value - 1)

    def find(self, value: int) -> tuple[int, int]:
        return self.position(self.tiles.index(value))

    # -- queries --------------------------------------------------------------

    def get_tile(self, row: int, col: int) -> int:
        return self.tiles[self.index(row, col)]

    def rows(self) -> list[list[int]]:
        """Return the tiles as a list of rows, for rendering."""
        return [
            self.tiles[r * self.size : (r + 1) * self.size]
            for r in range(self.size)
        ]

    def is_adjacent_to_blank(self, row: int, col: int) -> bool:
        br, bc = self.blank_pos
        return abs(row - br) + abs(col - bc) == 1

    def is_solved(self) -> bool:
        """Check if all tiles are in their goal positions."""
        last = len(self.tiles) - 1
        for i in range(last):
            if self.tiles[i] != i + 1:
                return False
        return self.tiles[last] == 0

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if a specific tile is in its goal position."""
        return self.target_position(self.get_tile(row, col)) == (row, col)

    # -- mutation -------------------------------------------------------------

    def slide(self, row: int, col: int) -> None:
        """Swap the tile at (row, col) with the blank.

        Callers are responsible for checking adjacency first.
        """
        i = self.index(row, col)
        j = self.index(*self.blank_pos)
        self.tiles[i], self.tiles[j] = self.tiles[j], self.tiles[i]
        self.blank_pos = (row, col)

    def copy(self) -> Board:
        return Board(size=self.size, tiles=self.tiles[:])
